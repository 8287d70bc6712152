"""Catalog transports.

A transport fetches the JSON document behind a catalog URL. The loader
only depends on the CatalogTransport protocol; any failure raised by
fetch() is reported as a LoadFailed by the loader.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional, Protocol

import httpx

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class CatalogTransport(Protocol):
    """Fetches a JSON document for a URL."""

    async def fetch(self, url: str) -> Any: ...


class HttpxCatalogTransport:
    """Fetch catalogs over HTTP with an httpx AsyncClient.

    Relative catalog paths (e.g., "/assets/locales/fr.json") are resolved
    against ``base_url``.

    Attributes:
        base_url: Base URL of the catalog host.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def fetch(self, url: str) -> Any:
        """Request a catalog document.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses.
            ValueError: If the body is not valid JSON.
        """
        response = await self._get_client().get(url)
        response.raise_for_status()
        logger.debug("catalog_response_received", url=url, status=response.status_code)
        return response.json()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class FileSystemCatalogTransport:
    """Read catalogs from a directory, treating catalog URLs as relative paths.

    Example:
        transport = FileSystemCatalogTransport(Path("static"))
        # "/assets/locales/fr.json" -> static/assets/locales/fr.json
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def resolve(self, url: str) -> Path:
        path = (self.root / url.lstrip("/")).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise ValueError(f"Catalog path escapes the catalog root: {url}")
        return path

    def _read(self, url: str) -> Any:
        path = self.resolve(url)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    async def fetch(self, url: str) -> Any:
        """Read and parse a catalog file in a worker thread.

        Raises:
            FileNotFoundError: If the catalog file does not exist.
            ValueError: If the file is not valid JSON or escapes the root.
        """
        return await asyncio.to_thread(self._read, url)
