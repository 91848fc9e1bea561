"""Errores del núcleo de integraciones.

La taxonomía es cerrada: cualquier fallo del pipeline resolver → verificar →
invocar llega al llamador como una de estas tres clases, nunca como una
excepción arbitraria de la integración.
"""

from __future__ import annotations


class IntegrationError(Exception):
    """Base común para los errores que el núcleo devuelve al llamador."""


class PluginNotFound(IntegrationError):
    """No hay integración registrada para la transportadora pedida."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Integración no implementada: {name}")


class ActionNotSupported(IntegrationError):
    """La transportadora existe pero no implementa la acción pedida."""

    def __init__(self, action: str, plugin: str | None = None) -> None:
        self.action = action
        self.plugin = plugin
        if plugin:
            message = f"Acción no soportada por {plugin}: {action}"
        else:
            message = f"Acción no soportada: {action}"
        super().__init__(message)


class ActionExecutionError(IntegrationError):
    """La acción se ejecutó pero falló; ``cause`` guarda la excepción original."""

    def __init__(self, plugin: str, action: str, cause: BaseException) -> None:
        self.plugin = plugin
        self.action = action
        self.cause = cause
        super().__init__(f"Falló {plugin}.{action}: {cause!r}")
