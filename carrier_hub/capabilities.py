"""Verificación de que una integración soporta la acción pedida."""

from __future__ import annotations

from .actions import ActionHandle, Plugin
from .errors import ActionNotSupported
from .naming import canonicalize_name


def verify(plugin: Plugin, action: str) -> ActionHandle:
    """Devuelve el handle de ``action`` o lanza :class:`ActionNotSupported`.

    Solo consulta el conjunto de acciones declarado por el plugin; nunca
    construye nombres de símbolos a partir de la entrada del usuario.
    """

    key = canonicalize_name(action)
    handler = plugin.actions.get(key)
    if handler is None:
        raise ActionNotSupported(action, plugin=plugin.name)
    return ActionHandle(plugin_name=plugin.name, action_name=key, action=handler)


def supports(plugin: Plugin, action: str) -> bool:
    return canonicalize_name(action) in plugin.actions


def list_actions(plugin: Plugin) -> list[str]:
    return list(plugin.action_names)
