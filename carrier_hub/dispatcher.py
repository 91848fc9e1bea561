"""Invocación de acciones verificadas y pipeline completo de despacho."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from .actions import ActionHandle
from .capabilities import verify
from .errors import ActionExecutionError, ActionNotSupported, PluginNotFound
from .observability import observe_latency, record_dispatch
from .registry import PluginRegistry

logger = logging.getLogger(__name__)

# Los nombres rechazados vienen del usuario; no se usan como etiqueta.
UNKNOWN_LABEL = "unknown"


class Dispatcher:
    """Ejecuta acciones de integración a partir del nombre de transportadora."""

    def __init__(self, registry: PluginRegistry, timeout: float | None = None) -> None:
        self.registry = registry
        self.timeout = timeout

    async def invoke(
        self,
        handle: ActionHandle,
        data: Any,
        fields: Any,
        timeout: float | None = None,
    ) -> Any:
        """Invoca la acción y espera su resultado.

        ``data`` y ``fields`` llegan a la acción sin tocar. Cualquier
        excepción de la acción (incluido el vencimiento de ``timeout``) se
        entrega como :class:`ActionExecutionError`; la cancelación de la tarea
        se propaga tal cual.
        """

        limit = timeout if timeout is not None else self.timeout
        start = time.perf_counter()
        try:
            if limit is None:
                result = await handle.action(data, fields)
            else:
                result = await asyncio.wait_for(handle.action(data, fields), timeout=limit)
        except Exception as exc:
            record_dispatch(handle.plugin_name, handle.action_name, "error")
            logger.error("Error ejecutando %s: %s", handle.label, exc)
            raise ActionExecutionError(handle.plugin_name, handle.action_name, exc) from exc
        finally:
            observe_latency(handle.plugin_name, handle.action_name, time.perf_counter() - start)
        record_dispatch(handle.plugin_name, handle.action_name, "ok")
        logger.info("Acción %s completada", handle.label)
        return result

    def invoke_sync(self, handle: ActionHandle, data: Any, fields: Any, timeout: float | None = None) -> Any:
        """Variante bloqueante para llamadores sin event loop.

        Desde código asíncrono hay que usar ``await invoke(...)``; aquí se
        rechaza con ``RuntimeError`` antes de crear la corrutina.
        """

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError("invoke_sync no puede usarse dentro de un event loop; use await invoke()")
        return asyncio.run(self.invoke(handle, data, fields, timeout=timeout))

    async def dispatch(
        self,
        carrier: str,
        action: str,
        data: Any,
        fields: Any,
        timeout: float | None = None,
    ) -> Any:
        """Resuelve la transportadora, verifica la acción e invoca."""

        try:
            plugin = self.registry.resolve(carrier)
        except PluginNotFound:
            record_dispatch(UNKNOWN_LABEL, UNKNOWN_LABEL, "not_found")
            logger.warning("Integración no registrada: %s", carrier)
            raise
        try:
            handle = verify(plugin, action)
        except ActionNotSupported:
            record_dispatch(plugin.name, UNKNOWN_LABEL, "unsupported")
            logger.warning("%s no soporta la acción %s", plugin.name, action)
            raise
        return await self.invoke(handle, data, fields, timeout=timeout)
