"""Tests for l10n.loader and l10n.cache modules."""

from unittest.mock import MagicMock

import pytest

from l10n import CatalogCache, CatalogLoader, GettextJSONEngine, LoadFailed

pytestmark = pytest.mark.unit


@pytest.fixture
def loader(transport, engine):
    return CatalogLoader(transport=transport, engine=engine)


class TestBuildUrl:
    """Tests for catalog URL construction."""

    def test_default_path(self, loader):
        assert loader.build_url("fr") == "/assets/locales/fr.json"

    def test_custom_base_path(self, transport, engine):
        loader = CatalogLoader(transport, engine, json_path="/static/i18n")
        assert loader.build_url("en") == "/static/i18n/en.json"

    def test_fingerprinted_locale(self, transport, engine):
        """Locales with a fingerprint get an extra path segment."""
        loader = CatalogLoader(
            transport, engine, fingerprint_map={"fr": "3f2a9c"}
        )
        assert loader.build_url("fr") == "/assets/locales/3f2a9c/fr.json"
        assert loader.build_url("en") == "/assets/locales/en.json"


class TestCatalogLoader:
    """Tests for CatalogLoader.load()."""

    @pytest.mark.asyncio
    async def test_load_feeds_engine_and_cache(self, loader, transport, engine):
        """load() fetches the catalog, caches it and feeds the engine."""
        await loader.load("fr")

        assert transport.requests == ["/assets/locales/fr.json"]
        assert "fr" in loader.cache
        engine.set_locale("fr")
        assert engine.gettext("French") == "Français"

    @pytest.mark.asyncio
    async def test_second_load_is_served_from_cache(self, loader, transport):
        """Loading the same locale twice fetches it once."""
        await loader.load("fr")
        await loader.load("fr")

        assert transport.calls_for("/assets/locales/fr.json") == 1

    @pytest.mark.asyncio
    async def test_cached_load_feeds_engine(self, transport):
        """A cache hit still feeds the catalog to the engine."""
        engine = MagicMock()
        loader = CatalogLoader(transport, engine)

        await loader.load("fr")
        await loader.load("fr")

        assert engine.load_json.call_count == 2

    @pytest.mark.asyncio
    async def test_cache_is_independent_of_engine_document(
        self, make_transport, fr_catalog
    ):
        """Mutating the fetched document does not alter the cached snapshot."""
        document = dict(fr_catalog)
        transport = make_transport({"/assets/locales/fr.json": document})
        engine = GettextJSONEngine()
        loader = CatalogLoader(transport, engine)

        await loader.load("fr")
        document["French"] = "changed"
        await loader.load("fr")

        engine.set_locale("fr")
        assert engine.gettext("French") == "Français"
        assert loader.cache.get("fr")["French"] == "Français"

    @pytest.mark.asyncio
    async def test_engine_gets_fresh_copy_on_cache_hit(self, loader):
        """The engine never receives the cached object itself."""
        loader.engine = MagicMock()
        await loader.load("fr")
        await loader.load("fr")

        fed = loader.engine.load_json.call_args[0][0]
        assert fed == loader.cache.get("fr")
        assert fed is not loader.cache.get("fr")

    @pytest.mark.asyncio
    async def test_transport_failure(self, loader, transport, monkeypatch):
        """A failed fetch raises LoadFailed, logs the URL and leaves the cache alone."""
        mock_logger = MagicMock()
        monkeypatch.setattr("l10n.loader.logger", mock_logger)
        transport.failing.add("/assets/locales/fr.json")

        with pytest.raises(LoadFailed) as exc_info:
            await loader.load("fr")

        assert exc_info.value.url == "/assets/locales/fr.json"
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert "fr" not in loader.cache
        mock_logger.error.assert_called_once_with(
            "catalog_load_failed",
            locale="fr",
            url="/assets/locales/fr.json",
            reason="connection reset",
        )

    @pytest.mark.asyncio
    async def test_failure_is_retried(self, loader, transport):
        """A failed locale is fetched again on the next load."""
        transport.failing.add("/assets/locales/fr.json")
        with pytest.raises(LoadFailed):
            await loader.load("fr")

        transport.failing.clear()
        await loader.load("fr")

        assert transport.calls_for("/assets/locales/fr.json") == 2
        assert "fr" in loader.cache

    @pytest.mark.asyncio
    async def test_engine_rejection_is_a_load_failure(self, make_transport, engine):
        """Documents the engine rejects are not cached."""
        transport = make_transport({"/assets/locales/fr.json": ["not", "a", "catalog"]})
        loader = CatalogLoader(transport, engine)

        with pytest.raises(LoadFailed):
            await loader.load("fr")

        assert "fr" not in loader.cache


class TestCatalogCache:
    """Tests for CatalogCache."""

    def test_empty(self):
        cache = CatalogCache()
        assert len(cache) == 0
        assert cache.get("en") is None
        assert "en" not in cache

    def test_put_and_get(self):
        cache = CatalogCache()
        cache.put("en", {"a": "b"})
        assert cache.get("en") == {"a": "b"}
        assert cache.locales() == ["en"]

    def test_entries_are_never_replaced(self):
        cache = CatalogCache()
        cache.put("en", {"a": "first"})
        cache.put("en", {"a": "second"})
        assert cache.get("en") == {"a": "first"}

    def test_snapshot_is_deep(self):
        document = {"msg": ["one", "many"]}
        snapshot = CatalogCache.snapshot(document)
        document["msg"].append("extra")
        assert snapshot == {"msg": ["one", "many"]}
