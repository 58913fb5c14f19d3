"""Application entry point and composition root."""

import structlog
from falcon.asgi import App
from psycopg_pool import AsyncConnectionPool

from permsvc import __version__
from permsvc.application.ports import GroupDirectory
from permsvc.application.services import (
    PermissionLevelRegistry,
    PermissionMutationEngine,
    PermissionQueryEngine,
    SourceIdEnricher,
    SubjectIdentityResolver,
)
from permsvc.application.use_cases.catalog.resource_types import ResourceTypeCatalog
from permsvc.application.use_cases.catalog.resources import ResourceCatalog
from permsvc.application.use_cases.catalog.subjects import SubjectCatalog
from permsvc.application.use_cases.permission.copy_permissions import CopyPermissionsUseCase
from permsvc.application.use_cases.permission.grant_permission import GrantPermissionUseCase
from permsvc.application.use_cases.permission.list_permissions import (
    ListPermissionsUseCase,
    ListResourcePermissionsUseCase,
)
from permsvc.application.use_cases.permission.lookup_permissions import (
    AbbreviatedLookupUseCase,
    LookupBySubjectAndResourceTypeUseCase,
    LookupBySubjectAndResourceUseCase,
    LookupBySubjectUseCase,
)
from permsvc.application.use_cases.permission.revoke_permission import RevokePermissionUseCase
from permsvc.config import Settings, get_settings
from permsvc.infrastructure.directory import (
    GrouperDirectory,
    KeycloakDirectory,
    StaticGroupDirectory,
)
from permsvc.infrastructure.persistence.postgres.connection import create_pool
from permsvc.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from permsvc.interfaces.api.app import create_app
from permsvc.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from permsvc.interfaces.api.resources.health import HealthResource
from permsvc.interfaces.api.resources.permissions import (
    AbbreviatedPermissionsResource,
    CopyPermissionsResource,
    PermissionsResource,
    ResourcePermissionsResource,
    SubjectPermissionsResource,
    SubjectResourcePermissionResource,
)
from permsvc.interfaces.api.resources.resource_types import (
    ResourceTypeResource,
    ResourceTypesResource,
)
from permsvc.interfaces.api.resources.resources import ResourceResource, ResourcesResource
from permsvc.interfaces.api.resources.subjects import SubjectResource, SubjectsResource
from permsvc.logging import configure_logging

logger = structlog.get_logger(__name__)


def build_group_directory(
    settings: Settings,
) -> tuple[GroupDirectory, list[AsyncConnectionPool]]:
    """Build the configured group directory and any pools it owns."""
    if settings.group_directory == "grouper":
        pool = create_pool(
            settings.grouper_database_url,
            min_size=1,
            max_size=settings.db_pool_max_size,
        )
        return GrouperDirectory(pool, settings.grouper_folder_name_prefix), [pool]
    if settings.group_directory == "keycloak":
        directory = KeycloakDirectory.from_settings(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            group_name_prefix=settings.grouper_folder_name_prefix,
        )
        return directory, []
    return StaticGroupDirectory(), []


def build_app(
    unit_of_work_factory: object,
    group_directory: GroupDirectory,
    middleware: list[object] | None = None,
) -> App:
    """Wire engines, use cases and API resources around the given collaborators."""
    levels = PermissionLevelRegistry()
    resolver = SubjectIdentityResolver(group_directory)
    query_engine = PermissionQueryEngine(levels)
    mutation_engine = PermissionMutationEngine(levels)
    enricher = SourceIdEnricher(group_directory)

    lookup_args = dict(
        unit_of_work_factory=unit_of_work_factory,
        identity_resolver=resolver,
        query_engine=query_engine,
        enricher=enricher,
    )
    grant_permission = GrantPermissionUseCase(
        unit_of_work_factory=unit_of_work_factory,
        mutation_engine=mutation_engine,
        enricher=enricher,
    )
    revoke_permission = RevokePermissionUseCase(
        unit_of_work_factory=unit_of_work_factory,
        mutation_engine=mutation_engine,
    )
    copy_permissions = CopyPermissionsUseCase(
        unit_of_work_factory=unit_of_work_factory,
        mutation_engine=mutation_engine,
    )
    resource_type_catalog = ResourceTypeCatalog(unit_of_work_factory)
    resource_catalog = ResourceCatalog(unit_of_work_factory)
    subject_catalog = SubjectCatalog(unit_of_work_factory)

    return create_app(
        health_resource=HealthResource(unit_of_work_factory),
        permissions_resource=PermissionsResource(
            ListPermissionsUseCase(unit_of_work_factory, enricher),
            grant_permission,
        ),
        resource_permissions_resource=ResourcePermissionsResource(
            ListResourcePermissionsUseCase(unit_of_work_factory, enricher)
        ),
        subject_resource_permission_resource=SubjectResourcePermissionResource(
            grant_permission, revoke_permission
        ),
        copy_permissions_resource=CopyPermissionsResource(copy_permissions),
        subject_permissions_resource=SubjectPermissionsResource(
            LookupBySubjectUseCase(**lookup_args),
            LookupBySubjectAndResourceTypeUseCase(**lookup_args),
            LookupBySubjectAndResourceUseCase(**lookup_args),
        ),
        abbreviated_permissions_resource=AbbreviatedPermissionsResource(
            AbbreviatedLookupUseCase(**lookup_args)
        ),
        resource_types_resource=ResourceTypesResource(resource_type_catalog),
        resource_type_resource=ResourceTypeResource(resource_type_catalog),
        resources_resource=ResourcesResource(resource_catalog),
        resource_resource=ResourceResource(resource_catalog),
        subjects_resource=SubjectsResource(subject_catalog),
        subject_resource=SubjectResource(subject_catalog),
        middleware=middleware or [],
    )


def create_permsvc_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        schema=settings.database_schema,
    )
    uow_factory = create_uow_factory(pool)
    group_directory, directory_pools = build_group_directory(settings)

    logger.info(
        "app_configured",
        version=__version__,
        environment=settings.environment,
        group_directory=settings.group_directory,
    )
    return build_app(
        uow_factory,
        group_directory,
        middleware=[PoolLifespanMiddleware(pool, *directory_pools)],
    )


def main() -> None:
    """CLI entry point - run the uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_permsvc_app()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
