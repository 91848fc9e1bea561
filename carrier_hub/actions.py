"""Contrato de acciones y representación inmutable de un plugin."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Mapping, Protocol

from .naming import canonicalize_name


class Action(Protocol):
    """Forma que debe cumplir toda acción de una integración.

    Recibe los datos de la petición y los campos de configuración propios de
    la integración (p.ej. un token) y devuelve el resultado de forma
    asíncrona. La validación de ``data`` y ``fields`` es responsabilidad de la
    acción.
    """

    def __call__(self, data: Any, fields: Any) -> Awaitable[Any]:  # pragma: no cover - interface
        ...


@dataclass(frozen=True, eq=False)
class Plugin:
    """Integración con nombre y un conjunto fijo de acciones declaradas.

    La igualdad y el hash son por identidad: el registro guarda una única
    instancia por transportadora.
    """

    name: str
    actions: Mapping[str, Action] = field(default_factory=dict)

    def __post_init__(self) -> None:
        declared: dict[str, Action] = {}
        for action_name, action in dict(self.actions).items():
            key = canonicalize_name(action_name)
            if not key:
                raise ValueError(f"{self.name}: nombre de acción vacío")
            if key in declared:
                raise ValueError(f"{self.name}: acción duplicada {action_name!r}")
            if not callable(action):
                raise TypeError(f"{self.name}.{key} no es invocable")
            declared[key] = action
        object.__setattr__(self, "actions", MappingProxyType(declared))

    @property
    def action_names(self) -> tuple[str, ...]:
        return tuple(sorted(self.actions))


@dataclass(frozen=True)
class ActionHandle:
    """Referencia verificada a un par plugin + acción, lista para invocar."""

    plugin_name: str
    action_name: str
    action: Action = field(repr=False, compare=False)

    @property
    def label(self) -> str:
        return f"{self.plugin_name}.{self.action_name}"
