"""Integraciones con transportadoras.

Cada módulo expone ``build_plugin(settings)`` con sus acciones declaradas de
forma explícita. Para sumar una transportadora basta con agregar su módulo y
listarlo en :func:`default_plugins`; el registro no descubre código en tiempo
de petición.
"""

from __future__ import annotations

import httpx

from ..actions import Plugin
from ..config import Settings
from ..registry import PluginRegistry
from . import braspress, correios


def default_plugins(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> list[Plugin]:
    return [
        correios.build_plugin(settings, transport=transport),
        braspress.build_plugin(settings, transport=transport),
    ]


def build_default_registry(
    settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None
) -> PluginRegistry:
    """Registro con las transportadoras incluidas, configurado vía entorno."""

    settings = settings or Settings.from_env()
    return PluginRegistry(default_plugins(settings, transport=transport))
