"""Configuración leída de variables de entorno."""

from __future__ import annotations

import os
from dataclasses import dataclass

CARRIER_MODES = ("live", "mock")


@dataclass(frozen=True)
class Settings:
    """Parámetros de las integraciones.

    ``CARRIER_MODE=mock`` hace que los plugins respondan con datos sintéticos
    sin salir a internet, igual que el proveedor de mapas ficticio en
    entornos sin conectividad.
    """

    mode: str = "live"
    http_timeout: float = 10.0
    dispatch_timeout: float | None = None
    correios_base_url: str = "https://api.correios.com.br"
    braspress_base_url: str = "https://api.braspress.com"

    @classmethod
    def from_env(cls) -> "Settings":
        mode = os.getenv("CARRIER_MODE", "live").strip().lower()
        if mode not in CARRIER_MODES:
            raise ValueError(f"CARRIER_MODE inválido: {mode} (use {', '.join(CARRIER_MODES)})")
        return cls(
            mode=mode,
            http_timeout=_float_env("CARRIER_HTTP_TIMEOUT", 10.0),
            dispatch_timeout=_float_env("CARRIER_DISPATCH_TIMEOUT", None),
            correios_base_url=os.getenv("CORREIOS_BASE_URL", cls.correios_base_url).rstrip("/"),
            braspress_base_url=os.getenv("BRASPRESS_BASE_URL", cls.braspress_base_url).rstrip("/"),
        )

    @property
    def is_mock(self) -> bool:
        return self.mode == "mock"


def _float_env(env_var: str, fallback: float | None) -> float | None:
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return fallback
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{env_var} debe ser numérico: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{env_var} debe ser positivo: {raw!r}")
    return value
