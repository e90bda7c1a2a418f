from __future__ import annotations

from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource


class InfrastructureContainer(containers.DeclarativeContainer):
    # Database pool; init()/shutdown() are driven by the app lifespan
    database = providers.Resource(
        DatabaseResource,
        database_url=SETTINGS.DATABASE.DATABASE_URL,
        pool_size=SETTINGS.DATABASE.DB_POOL_SIZE,
        pool_timeout=SETTINGS.DATABASE.DB_POOL_TIMEOUT,
        pool_recycle=SETTINGS.DATABASE.DB_POOL_RECYCLE,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    conversation_message_repository = providers.Factory(
        "api.features.conversation_messages.repository.ConversationMessageRepository",
        db=infrastructure.database,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    conversation_message_controller = providers.Factory(
        "api.features.conversation_messages.controller.ConversationMessageController",
        repository=services.conversation_message_repository,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.features.conversation_messages.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
