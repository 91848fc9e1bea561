"""Ejecuta una acción de integración desde la línea de comandos.

Ejemplo:
    CARRIER_MODE=mock python scripts/track.py correios tracking \
        --codes AA123456789BR,AB987654321BR --field token=abc
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import pathlib
import sys
from typing import Sequence

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from carrier_hub import IntegrationError, Settings, build_dispatcher  # noqa: E402


def parse_fields(pairs: Sequence[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Campo inválido (use clave=valor): {pair}")
        fields[key] = value
    return fields


async def main(carrier: str, action: str, codes: list[str], fields: dict[str, str]) -> int:
    dispatcher = build_dispatcher(Settings.from_env())
    try:
        results = await dispatcher.dispatch(carrier, action, {"codes": codes}, fields)
    except IntegrationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for result in results:
        print(json.dumps(result.to_dict(), ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Despacho de acciones de transportadoras")
    parser.add_argument("carrier", help="Nombre de la transportadora (p.ej. correios)")
    parser.add_argument("action", help="Acción a ejecutar (p.ej. tracking)")
    parser.add_argument("--codes", required=True, help="Códigos separados por coma")
    parser.add_argument(
        "--field",
        dest="fields",
        action="append",
        default=[],
        help="Campo de configuración clave=valor (repetible)",
    )
    parser.add_argument("--verbose", action="store_true", help="Logging en nivel DEBUG")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    code_list = [code for code in args.codes.split(",") if code.strip()]
    sys.exit(asyncio.run(main(args.carrier, args.action, code_list, parse_fields(args.fields))))
