"""Catalog loading.

Resolves a locale to its catalog URL, fetches the document through a
transport, caches a snapshot and feeds the phrase engine.
"""

from typing import Dict, Optional

from infrastructure.logging import get_module_logger
from l10n.cache import CatalogCache
from l10n.engine import PhraseEngine
from l10n.errors import LoadFailed
from l10n.transport import CatalogTransport

logger = get_module_logger()


class CatalogLoader:
    """Loader for JSON catalogs served under a base path.

    Expects documents at ``<json_path>[/<fingerprint>]/<locale>.json``.
    A locale is fetched at most once: later loads are served from the
    cache, which is never considered stale.

    Attributes:
        transport: Fetches the JSON document behind a URL.
        engine: Phrase engine receiving the loaded catalogs.
        cache: Snapshots of the catalogs loaded so far.
        json_path: Base path of the catalog documents.
        fingerprint_map: Optional locale -> fingerprint path fragment.
    """

    def __init__(
        self,
        transport: CatalogTransport,
        engine: PhraseEngine,
        cache: Optional[CatalogCache] = None,
        json_path: str = "/assets/locales",
        fingerprint_map: Optional[Dict[str, str]] = None,
    ):
        self.transport = transport
        self.engine = engine
        self.cache = cache if cache is not None else CatalogCache()
        self.json_path = json_path
        self.fingerprint_map = fingerprint_map

    def build_url(self, locale: str) -> str:
        """Build the catalog URL for a locale.

        Args:
            locale: Locale code.

        Returns:
            URL such as "/assets/locales/fr.json" or, with a fingerprint,
            "/assets/locales/a1b2c3/fr.json".
        """
        fingerprint = (self.fingerprint_map or {}).get(locale)
        path = f"{self.json_path}/{fingerprint}" if fingerprint else self.json_path
        return f"{path}/{locale}.json"

    async def load(self, locale: str) -> None:
        """Load the catalog of a locale into the phrase engine.

        Args:
            locale: Locale to load.

        Raises:
            LoadFailed: If the fetch fails or the engine rejects the
                document. The cache is left untouched in that case.
        """
        cached = self.cache.get(locale)
        if cached is not None:
            self.engine.load_json(self.cache.snapshot(cached))
            logger.info("loaded_from_cache", locale=locale)
            return

        url = self.build_url(locale)
        try:
            document = await self.transport.fetch(url)
            snapshot = self.cache.snapshot(document)
            self.engine.load_json(document)
        except Exception as e:
            logger.error("catalog_load_failed", locale=locale, url=url, reason=str(e))
            raise LoadFailed(locale, url, e) from e

        self.cache.put(locale, snapshot)
        logger.info("loaded_catalog", locale=locale, url=url)
