"""Canonicalización de nombres de transportadoras y acciones."""

from __future__ import annotations

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def canonicalize_name(name: str) -> str:
    """Devuelve la clave canónica de ``name``.

    Quita espacios en los extremos y pasa a minúsculas solo las letras ASCII,
    así el resultado no depende del locale ni de reglas Unicode especiales
    (``"İ"`` o ``"ß"`` quedan intactos). Es total sobre ``str`` e idempotente:
    ``canonicalize_name(canonicalize_name(x)) == canonicalize_name(x)``.
    """

    if not isinstance(name, str):
        raise TypeError(f"Se esperaba str, se recibió {type(name).__name__}")
    return name.strip().translate(_ASCII_LOWER)
