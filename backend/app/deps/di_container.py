"""
Dependency injection container using dependency-injector.
Wires configuration, services, integrations and controllers.
"""

from dependency_injector import containers, providers

from app.core.integrations.auth_service import AuthServiceClient
from app.core.integrations.http.http_client import HttpClient
from app.core.request_logging import RequestLoggerConfig
from app.services.health_service import HealthService
from app.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Request logger settings, fixed for the life of the process
    request_logger_config = providers.Singleton(
        RequestLoggerConfig.for_environment,
        environment=config.environment,
    )

    # Integrations
    auth_http_client = providers.Singleton(
        HttpClient,
        base_url=config.auth_service_url,
        timeout=config.auth_service_timeout,
        max_retries=config.auth_service_max_retries,
    )

    auth_service_client = providers.Factory(
        AuthServiceClient,
        http_client=auth_http_client,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
        environment=config.environment,
        request_logger_config=request_logger_config,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


def build_container(app_settings) -> Container:
    """Create a container configured from a Settings instance."""
    container = Container()
    container.config.from_dict({
        "environment": app_settings.ENVIRONMENT,
        "auth_service_url": app_settings.AUTH_SERVICE_URL,
        "auth_service_timeout": app_settings.AUTH_SERVICE_TIMEOUT,
        "auth_service_max_retries": app_settings.AUTH_SERVICE_MAX_RETRIES,
    })
    return container
