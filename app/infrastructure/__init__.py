"""Infrastructure modules for the geolocation service.

Centralized infrastructure components:
- configuration: Settings management (Settings, MaxMindSettings, GeolocationSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- clients.maxmind: Pooled MaxMind database reader (MaxMindClient)
- services: Dependency injection services (SettingsDep, LocatorDep, get_settings)
"""
