"""Registro de integraciones por nombre canónico.

El registro se construye una vez al arrancar el proceso y durante las
peticiones solo se lee. ``reload`` reemplaza el mapa completo en una sola
asignación, de modo que un lector concurrente ve el mapa viejo o el nuevo,
nunca uno a medio construir.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Iterable, Mapping

from .actions import Plugin
from .errors import PluginNotFound
from .naming import canonicalize_name

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Mapa inmutable de nombre canónico a :class:`Plugin`."""

    def __init__(self, plugins: Iterable[Plugin] = ()) -> None:
        self._write_lock = threading.Lock()
        self._plugins: Mapping[str, Plugin] = _build_map(plugins)

    def resolve(self, name: str) -> Plugin:
        plugin = self._plugins.get(canonicalize_name(name))
        if plugin is None:
            raise PluginNotFound(name)
        return plugin

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonicalize_name(name) in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def names(self) -> list[str]:
        """Nombres visibles de las integraciones registradas, ordenados."""

        return sorted(plugin.name for plugin in self._plugins.values())

    def register(self, plugin: Plugin) -> None:
        """Agrega un plugin; pensado para el arranque, no para peticiones."""

        with self._write_lock:
            current = dict(self._plugins)
            key = _key_for(plugin)
            if key in current:
                raise ValueError(f"Integración duplicada: {plugin.name}")
            current[key] = plugin
            self._plugins = MappingProxyType(current)
        logger.info("Integración registrada: %s (%s)", plugin.name, ", ".join(plugin.action_names))

    def reload(self, plugins: Iterable[Plugin]) -> None:
        """Sustituye todas las integraciones de forma atómica."""

        fresh = _build_map(plugins)
        with self._write_lock:
            self._plugins = fresh
        logger.info("Registro recargado con %d integraciones", len(fresh))


def _key_for(plugin: Plugin) -> str:
    key = canonicalize_name(plugin.name)
    if not key:
        raise ValueError("El nombre de la integración no puede estar vacío")
    return key


def _build_map(plugins: Iterable[Plugin]) -> Mapping[str, Plugin]:
    table: dict[str, Plugin] = {}
    for plugin in plugins:
        key = _key_for(plugin)
        if key in table:
            raise ValueError(f"Integración duplicada: {plugin.name}")
        table[key] = plugin
    return MappingProxyType(table)
