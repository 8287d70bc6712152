"""Factory functions for creating l10n components.

Provides convenience functions for wiring the localization service with
default collaborators built from application settings.
"""

from typing import Optional

from infrastructure.configuration import L10nSettings
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from l10n.engine import PhraseEngine
from l10n.environment import ClientEnvironment
from l10n.service import L10nService
from l10n.transport import CatalogTransport, HttpxCatalogTransport

logger = get_module_logger()


def create_l10n_service(
    settings: Optional[L10nSettings] = None,
    transport: Optional[CatalogTransport] = None,
    environment: Optional[ClientEnvironment] = None,
    engine: Optional[PhraseEngine] = None,
) -> L10nService:
    """Create and configure an L10nService instance.

    Args:
        settings: Localization settings (default: application settings)
        transport: Catalog transport (default: HTTP transport on L10N_BASE_URL)
        environment: Client language preferences (default: process locale variables)
        engine: Phrase engine (default: GettextJSONEngine)

    Returns:
        L10nService: Configured service. When auto-initialization is enabled
        and an event loop is running, await ``service.ready()`` before the
        first translation.

    Usage:
        # Use defaults from the environment
        service = create_l10n_service()
        await service.ready()

        # Per-request service detecting the locale from headers
        service = create_l10n_service(
            environment=ClientEnvironment.from_headers(request.headers),
        )
    """
    if settings is None:
        settings = get_settings().l10n

    if transport is None:
        transport = HttpxCatalogTransport(
            base_url=settings.base_url,
            timeout=settings.request_timeout_seconds,
        )

    if environment is None:
        environment = ClientEnvironment.from_os_environ()

    service = L10nService(
        settings=settings,
        transport=transport,
        environment=environment,
        engine=engine,
    )

    logger.info(
        "l10n_service_created",
        default_locale=settings.default_locale,
        force_locale=settings.force_locale,
        auto_initialize=settings.auto_initialize,
        json_path=settings.json_path,
        available_locales=sorted(settings.available_locales),
    )

    return service
