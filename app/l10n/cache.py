"""In-memory catalog cache.

Holds one deep-copied snapshot per locale so that a previously loaded
catalog can be fed to the phrase engine again without another fetch.
"""

import copy
from typing import Any, Dict, List, Optional

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class CatalogCache:
    """Insert-once mapping of locale code to catalog snapshot.

    Entries are never evicted or invalidated: a cached catalog is
    authoritative for the lifetime of the cache. Only successfully
    loaded documents are stored (see CatalogLoader.load).
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    def __contains__(self, locale: object) -> bool:
        return locale in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def snapshot(document: Any) -> Any:
        """Create an independent deep copy of a catalog document."""
        return copy.deepcopy(document)

    def get(self, locale: str) -> Optional[Any]:
        """Get the cached snapshot for a locale.

        Args:
            locale: Locale code.

        Returns:
            The cached document, or None if the locale was never loaded.
        """
        return self._entries.get(locale)

    def put(self, locale: str, snapshot: Any) -> None:
        """Store the snapshot of a successfully loaded catalog.

        The snapshot must not be the object handed to the phrase engine,
        which may keep or mutate it. Use snapshot() to create one.

        Args:
            locale: Locale code.
            snapshot: Deep copy of the catalog document.
        """
        if locale in self._entries:
            logger.debug("catalog_already_cached", locale=locale)
            return
        self._entries[locale] = snapshot
        logger.info("catalog_cached", locale=locale, cache_size=len(self._entries))

    def locales(self) -> List[str]:
        """List the locales with a cached catalog."""
        return list(self._entries.keys())
