"""
Swagger converter client.
Posts a Swagger 2.0 document to a conversion service (swagger.io's converter
by default) and returns the equivalent OpenAPI 3.0 document.
"""
import logging
from typing import Optional

import httpx

from config import settings
from core.errors import MalformedMetadata, UpstreamUnavailable

logger = logging.getLogger(__name__)


class SwaggerConverterClient:
    """Thin client for the external Swagger → OpenAPI conversion endpoint."""

    def __init__(self, url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or settings.SWAGGER_CONVERTER_URL
        self.client = httpx.AsyncClient(timeout=settings.STARREZ_TIMEOUT_SECONDS, transport=transport)

    async def convert(self, swagger: dict) -> dict:
        try:
            resp = await self.client.post(self.url, json=swagger, headers={"Accept": "application/json"})
        except httpx.TransportError as e:
            raise UpstreamUnavailable(self.url, reason=str(e)) from e
        if not resp.is_success:
            logger.warning("Swagger conversion → %s: %s", resp.status_code, resp.text[:200])
            raise UpstreamUnavailable(self.url, resp.status_code, resp.reason_phrase)
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedMetadata(f"Converter returned invalid JSON: {e}") from e

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_):
        await self.aclose()
