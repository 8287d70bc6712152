"""Infrastructure modules for the l10n service.

Centralized infrastructure components:
- configuration: Settings management (Settings, L10nSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- events: Event models and an instance-scoped dispatcher
- services: Application-scoped providers (get_settings)
"""
