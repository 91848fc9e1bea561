"""Integración con Correios (API SRO Rastro).

Autenticación con token Bearer emitido por el portal CWS de Correios; el
token llega en los campos de configuración de cada petición.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

from ..actions import Plugin
from ..config import Settings
from .tracking import MockTracker, TrackingRequest, TrackingResult, track_codes

NAME = "Correios"


class CorreiosFields(BaseModel):
    token: str = Field(min_length=1)


def build_plugin(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> Plugin:
    """Construye el plugin de Correios con sus acciones declaradas."""

    mock_lookup = MockTracker(NAME)

    async def tracking(data, fields) -> list[TrackingResult]:
        request = TrackingRequest.model_validate(data)
        config = CorreiosFields.model_validate(fields)
        if settings.is_mock:
            return await track_codes(NAME, request.codes, mock_lookup, settings.http_timeout)

        headers = {"Authorization": f"Bearer {config.token}", "Accept": "application/json"}
        async with httpx.AsyncClient(
            base_url=settings.correios_base_url,
            headers=headers,
            timeout=settings.http_timeout,
            transport=transport,
        ) as client:

            async def lookup(code: str):
                response = await client.get(f"/srorastro/v1/objetos/{quote(code, safe='')}", params={"resultado": "T"})
                response.raise_for_status()
                return response.json()

            return await track_codes(NAME, request.codes, lookup, settings.http_timeout)

    return Plugin(name=NAME, actions={"tracking": tracking})
