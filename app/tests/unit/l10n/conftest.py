"""Feature-level fixtures for l10n system tests.

Provides catalog documents, a recording transport and service fixtures
for locale switching and translation scenarios.
"""

import asyncio
import copy

import pytest

from infrastructure.configuration import L10nSettings
from l10n import ClientEnvironment, GettextJSONEngine, L10nService


class StubTransport:
    """Catalog transport serving in-memory documents.

    Records every requested URL. URLs listed in ``failing`` raise
    ConnectionError, URLs listed in ``slow`` never complete and unknown
    URLs raise FileNotFoundError.
    """

    def __init__(self, documents: dict):
        self.documents = documents
        self.failing: set = set()
        self.slow: set = set()
        self.requests: list = []

    def calls_for(self, url: str) -> int:
        return self.requests.count(url)

    async def fetch(self, url: str):
        self.requests.append(url)
        if url in self.failing:
            raise ConnectionError("connection reset")
        if url in self.slow:
            await asyncio.Event().wait()
        if url not in self.documents:
            raise FileNotFoundError(url)
        return self.documents[url]


@pytest.fixture
def en_catalog():
    """English gettext.js catalog."""
    return {
        "": {"language": "en", "plural-forms": "nplurals=2; plural=n != 1;"},
        "English": "English",
        "French": "French",
        "German": "German",
    }


@pytest.fixture
def fr_catalog():
    """French gettext.js catalog."""
    return {
        "": {"language": "fr", "plural-forms": "nplurals=2; plural=n>1;"},
        "English": "Anglais",
        "French": "Français",
        "German": "Allemand",
        "Hello {{name}}": "Bonjour {{name}}",
        "One file": ["Un fichier", "{{count}} fichiers"],
        "{{fruit}} in the basket": "{{fruit}} dans le panier",
        "apple": "pomme",
    }


@pytest.fixture
def transport(en_catalog, fr_catalog):
    """Transport serving the en and fr catalogs under the default path."""
    return StubTransport(
        {
            "/assets/locales/en.json": copy.deepcopy(en_catalog),
            "/assets/locales/fr.json": copy.deepcopy(fr_catalog),
        }
    )


@pytest.fixture
def l10n_settings():
    """Settings with en/fr/de available and auto-initialization disabled.

    "de" is available but has no catalog behind it, so switching to it
    fails to load.
    """
    return L10nSettings(
        L10N_AUTO_INITIALIZE=False,
        L10N_DEFAULT_LOCALE="en",
        L10N_AVAILABLE_LOCALES={"en": "English", "fr": "French", "de": "German"},
    )


@pytest.fixture
def client_environment():
    """Environment of a French speaking desktop browser."""
    return ClientEnvironment(
        user_agent="Mozilla/5.0 (X11; Linux x86_64) Firefox/125.0",
        language="fr-FR",
    )


@pytest.fixture
def engine():
    return GettextJSONEngine()


@pytest.fixture
def service(l10n_settings, transport, client_environment, engine):
    """L10nService without auto-initialization."""
    return L10nService(
        settings=l10n_settings,
        transport=transport,
        environment=client_environment,
        engine=engine,
    )


@pytest.fixture
def make_transport():
    """Factory for transports serving custom documents."""
    return StubTransport
