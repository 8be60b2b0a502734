"""
StarRez REST API client.
Streams the databaseinfo XML feeds (table list, column lists), runs StarQL
enum lookups and fetches the legacy Swagger document.
"""
import logging
import xml.etree.ElementTree as ET
from contextlib import aclosing
from typing import AsyncIterator, Optional

import httpx

from core.errors import MalformedMetadata, UpstreamUnavailable
from models.starrez import ColumnDefinition, EnumDefinition, StarRezConnection

logger = logging.getLogger(__name__)

ENUM_QUERY = "SELECT {name} AS enumId, Description AS description FROM {name}"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


async def _raise_for_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    await resp.aread()
    logger.warning("%s %s → %s: %s", resp.request.method, resp.request.url, resp.status_code, resp.text[:200])
    raise UpstreamUnavailable(str(resp.request.url), resp.status_code, resp.reason_phrase)


class StarRezClient:
    """Thin async wrapper around the StarRez services API."""

    def __init__(self, connection: StarRezConnection, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.connection = connection
        self.client = httpx.AsyncClient(
            timeout=connection.timeout_seconds,
            auth=httpx.BasicAuth(connection.username, connection.api_key),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    # ── Requests ──────────────────────────────────────────────────────────────

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            resp = await self.client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise UpstreamUnavailable(url, reason=str(e)) from e
        await _raise_for_status(resp)
        return resp

    async def _iter_elements(self, url: str) -> AsyncIterator[tuple[str, dict[str, str]]]:
        """Yield (name, attributes) for every element below the document root, in document order."""
        parser = ET.XMLPullParser(events=("start", "end"))
        depth = 0

        def drain() -> list[tuple[str, dict[str, str]]]:
            nonlocal depth
            found = []
            for event, elem in parser.read_events():
                if event == "start":
                    depth += 1
                    if depth > 1:
                        found.append((_local_name(elem.tag), dict(elem.attrib)))
                else:
                    depth -= 1
                    if depth > 0:
                        elem.clear()
            return found

        try:
            async with self.client.stream("GET", url, headers={"Accept": "application/xml"}) as resp:
                await _raise_for_status(resp)
                async for chunk in resp.aiter_bytes():
                    parser.feed(chunk)
                    for element in drain():
                        yield element
            parser.close()
            for element in drain():
                yield element
        except ET.ParseError as e:
            raise MalformedMetadata(f"Could not parse XML from {url}: {e}") from e
        except httpx.TransportError as e:
            raise UpstreamUnavailable(url, reason=str(e)) from e

    # ── Database info ─────────────────────────────────────────────────────────

    async def iter_table_names(self, dev: bool = False) -> AsyncIterator[str]:
        """Stream table names from databaseinfo/tablelist.xml in document order."""
        url = f"{self.connection.base_url(dev)}/databaseinfo/tablelist.xml"
        async with aclosing(self._iter_elements(url)) as elements:
            async for name, _ in elements:
                yield name

    async def iter_columns(self, table_name: str, dev: bool = False) -> AsyncIterator[ColumnDefinition]:
        """Stream the column elements of databaseinfo/columnlist/{table}.xml."""
        url = f"{self.connection.base_url(dev)}/databaseinfo/columnlist/{table_name}.xml"
        async with aclosing(self._iter_elements(url)) as elements:
            async for name, attributes in elements:
                yield ColumnDefinition(name=name, attributes=attributes)

    # ── StarQL ────────────────────────────────────────────────────────────────

    async def query_enum(self, enum_name: str, dev: bool = False) -> EnumDefinition:
        """Resolve an enum's (id, label) pairs through a StarQL query."""
        url = f"{self.connection.base_url(dev)}/query"
        resp = await self._request(
            "POST",
            url,
            content=ENUM_QUERY.format(name=enum_name),
            headers={"Content-Type": "text/plain"},
        )
        try:
            rows = resp.json()
            values = [(int(row["enumId"]), str(row["description"])) for row in rows]
        except (ValueError, TypeError, KeyError) as e:
            raise MalformedMetadata(f"Unexpected enum data for {enum_name}: {e}") from e
        logger.debug("Resolved enum %s (%d values)", enum_name, len(values))
        return EnumDefinition(name=enum_name, values=values)

    # ── Swagger ───────────────────────────────────────────────────────────────

    async def get_swagger(self, dev: bool = False) -> dict:
        """Fetch the legacy Swagger 2.0 description of the StarRez API."""
        url = f"{self.connection.root_url(dev)}/swagger"
        resp = await self._request("GET", url)
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedMetadata(f"Swagger document at {url} is not JSON: {e}") from e

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_):
        await self.aclose()
