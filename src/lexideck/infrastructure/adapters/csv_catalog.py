"""
CSV Catalog Providers: Infrastructure adapters for the vocabulary list.

Implement CatalogProvider by fetching CSV text and handing it to
parse_catalog_csv.
"""

import logging
from pathlib import Path

import httpx

from lexideck.application.catalog import parse_catalog_csv
from lexideck.domain.constants import (
    DEFAULT_BACK_COLUMN,
    DEFAULT_FRONT_COLUMN,
    REQUEST_TIMEOUT,
    SAMPLE_CATALOG_CSV,
)
from lexideck.domain.exceptions import CatalogError
from lexideck.domain.models import Item
from lexideck.domain.ports import CatalogProvider

logger = logging.getLogger(__name__)


class HttpCatalogProvider(CatalogProvider):
    """Downloads the catalog CSV (e.g. a spreadsheet export link)."""

    def __init__(
        self,
        url: str,
        timeout: float = REQUEST_TIMEOUT,
        front_column: int = DEFAULT_FRONT_COLUMN,
        back_column: int = DEFAULT_BACK_COLUMN,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.front_column = front_column
        self.back_column = back_column
        self._transport = transport

    async def fetch_items(self) -> list[Item]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogError(
                f"Catalog request failed: HTTP {e.response.status_code} from {self.url}"
            ) from e
        except httpx.HTTPError as e:
            raise CatalogError(f"Could not reach catalog at {self.url}: {e}") from e

        items = parse_catalog_csv(response.text, self.front_column, self.back_column)
        logger.info(f"Fetched {len(items)} items from {self.url}")
        return items


class FileCatalogProvider(CatalogProvider):
    """Reads the catalog CSV from disk."""

    def __init__(
        self,
        path: Path,
        front_column: int = DEFAULT_FRONT_COLUMN,
        back_column: int = DEFAULT_BACK_COLUMN,
    ):
        self.path = path
        self.front_column = front_column
        self.back_column = back_column

    async def fetch_items(self) -> list[Item]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogError(f"Could not read catalog file {self.path}: {e}") from e

        items = parse_catalog_csv(text, self.front_column, self.back_column)
        logger.info(f"Loaded {len(items)} items from {self.path}")
        return items


class SampleCatalogProvider(CatalogProvider):
    """The bundled four-word deck, used when no source is configured."""

    async def fetch_items(self) -> list[Item]:
        logger.info("No catalog configured; using the bundled sample deck")
        return parse_catalog_csv(SAMPLE_CATALOG_CSV)
