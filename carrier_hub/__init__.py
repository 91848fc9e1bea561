"""Registro y despacho de integraciones con transportadoras.

Flujo de una petición: ``PluginRegistry.resolve`` → ``verify`` →
``Dispatcher.invoke``. Los fallos llegan como ``PluginNotFound``,
``ActionNotSupported`` o ``ActionExecutionError``.
"""

from .actions import Action, ActionHandle, Plugin
from .capabilities import list_actions, supports, verify
from .config import Settings
from .dispatcher import Dispatcher
from .errors import ActionExecutionError, ActionNotSupported, IntegrationError, PluginNotFound
from .integrations import build_default_registry
from .naming import canonicalize_name
from .registry import PluginRegistry


def build_dispatcher(settings: Settings | None = None) -> Dispatcher:
    """Dispatcher listo para usar con el registro por defecto."""

    settings = settings or Settings.from_env()
    return Dispatcher(build_default_registry(settings), timeout=settings.dispatch_timeout)


__all__ = [
    "Action",
    "ActionExecutionError",
    "ActionHandle",
    "ActionNotSupported",
    "Dispatcher",
    "IntegrationError",
    "Plugin",
    "PluginNotFound",
    "PluginRegistry",
    "Settings",
    "build_default_registry",
    "build_dispatcher",
    "canonicalize_name",
    "list_actions",
    "supports",
    "verify",
]
