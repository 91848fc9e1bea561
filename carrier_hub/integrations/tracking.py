"""Piezas compartidas por las acciones ``tracking`` de las transportadoras.

Cada código se consulta por separado y en paralelo, con su propio timeout.
Un código que falla produce un resultado con ``ok=False`` y no interrumpe a
los demás; el orden de salida es siempre el de los códigos de entrada.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, field_validator

from ..observability import record_tracking_lookup

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Awaitable[Any]]


class TrackingRequest(BaseModel):
    """Datos de la acción de rastreo: ``{"codes": [...]}``."""

    codes: list[str]

    @field_validator("codes")
    @classmethod
    def strip_codes(cls, value: list[str]) -> list[str]:
        cleaned = [code.strip() for code in value]
        if any(not code for code in cleaned):
            raise ValueError("los códigos de rastreo no pueden estar vacíos")
        return cleaned


@dataclass
class TrackingResult:
    """Respuesta cruda de la transportadora para un código."""

    code: str
    ok: bool
    payload: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "ok": self.ok, "payload": self.payload, "error": self.error}


@dataclass(frozen=True)
class MockTracker:
    """Consulta ficticia para entornos sin salida a internet.

    Se comparte entre todas las peticiones del plugin, así que no guarda
    estado entre llamadas.
    """

    carrier: str
    status: str = "Objeto em trânsito"

    async def __call__(self, code: str) -> dict[str, Any]:
        return {
            "carrier": self.carrier,
            "code": code,
            "events": [
                {
                    "status": self.status,
                    "at": datetime.now(timezone.utc).isoformat(),
                }
            ],
            "mock": True,
        }


async def track_codes(carrier: str, codes: list[str], lookup: Lookup, timeout: float | None) -> list[TrackingResult]:
    """Consulta ``codes`` en paralelo y devuelve un resultado por código."""

    async def track_one(code: str) -> TrackingResult:
        try:
            payload = await asyncio.wait_for(lookup(code), timeout=timeout)
        except Exception as exc:
            record_tracking_lookup(carrier, "error")
            logger.warning("Rastreo %s falló para %s: %r", carrier, code, exc)
            return TrackingResult(code=code, ok=False, error=str(exc) or exc.__class__.__name__)
        record_tracking_lookup(carrier, "ok")
        logger.debug("Rastreo %s ok para %s", carrier, code)
        return TrackingResult(code=code, ok=True, payload=payload)

    return list(await asyncio.gather(*(track_one(code) for code in codes)))
