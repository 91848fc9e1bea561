"""Integración con Braspress.

La API de rastreo usa autenticación básica y consulta por CNPJ del remitente
más el número de nota fiscal, que aquí es el código de rastreo.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

from ..actions import Plugin
from ..config import Settings
from .tracking import MockTracker, TrackingRequest, TrackingResult, track_codes

NAME = "Braspress"


class BraspressFields(BaseModel):
    user: str = Field(min_length=1)
    password: str = Field(min_length=1)
    cnpj: str = Field(min_length=1)


def build_plugin(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> Plugin:
    mock_lookup = MockTracker(NAME, status="Em rota de entrega")

    async def tracking(data, fields) -> list[TrackingResult]:
        request = TrackingRequest.model_validate(data)
        config = BraspressFields.model_validate(fields)
        if settings.is_mock:
            return await track_codes(NAME, request.codes, mock_lookup, settings.http_timeout)

        async with httpx.AsyncClient(
            base_url=settings.braspress_base_url,
            auth=(config.user, config.password),
            headers={"Accept": "application/json"},
            timeout=settings.http_timeout,
            transport=transport,
        ) as client:

            async def lookup(code: str):
                path = f"/v3/tracking/byNf/{quote(config.cnpj, safe='')}/{quote(code, safe='')}/json"
                response = await client.get(path)
                response.raise_for_status()
                return response.json()

            return await track_codes(NAME, request.codes, lookup, settings.http_timeout)

    return Plugin(name=NAME, actions={"tracking": tracking})
