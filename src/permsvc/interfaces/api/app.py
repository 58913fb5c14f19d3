"""Falcon ASGI application."""

from collections.abc import Sequence

import falcon.asgi
from falcon.asgi import App

from permsvc.interfaces.api.errors import register_error_handlers
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


def create_app(
    health_resource: HealthResource,
    permissions_resource: PermissionsResource,
    resource_permissions_resource: ResourcePermissionsResource,
    subject_resource_permission_resource: SubjectResourcePermissionResource,
    copy_permissions_resource: CopyPermissionsResource,
    subject_permissions_resource: SubjectPermissionsResource,
    abbreviated_permissions_resource: AbbreviatedPermissionsResource,
    resource_types_resource: ResourceTypesResource,
    resource_type_resource: ResourceTypeResource,
    resources_resource: ResourcesResource,
    resource_resource: ResourceResource,
    subjects_resource: SubjectsResource,
    subject_resource: SubjectResource,
    middleware: Sequence[object] = (),
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=list(middleware))
    register_error_handlers(app)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")

    app.add_route("/v1/permissions", permissions_resource)
    app.add_route(
        "/v1/permissions/resources/{resource_type}/{resource_name}",
        resource_permissions_resource,
    )
    app.add_route(
        "/v1/permissions/resources/{resource_type}/{resource_name}"
        "/subjects/{subject_type}/{subject_id}",
        subject_resource_permission_resource,
    )
    app.add_route(
        "/v1/permissions/copy/subjects/{subject_type}/{subject_id}",
        copy_permissions_resource,
    )
    app.add_route(
        "/v1/permissions/subjects/{subject_type}/{subject_id}",
        subject_permissions_resource,
    )
    app.add_route(
        "/v1/permissions/subjects/{subject_type}/{subject_id}/{resource_type}",
        subject_permissions_resource,
        suffix="type",
    )
    app.add_route(
        "/v1/permissions/subjects/{subject_type}/{subject_id}/{resource_type}/{resource_name}",
        subject_permissions_resource,
        suffix="resource",
    )
    app.add_route(
        "/v1/permissions/abbreviated/subjects/{subject_type}/{subject_id}/{resource_type}",
        abbreviated_permissions_resource,
    )

    app.add_route("/v1/resource_types", resource_types_resource)
    app.add_route("/v1/resource_types/{resource_type_id:uuid}", resource_type_resource)
    app.add_route("/v1/resources", resources_resource)
    app.add_route("/v1/resources/{resource_id:uuid}", resource_resource)
    app.add_route("/v1/subjects", subjects_resource)
    app.add_route("/v1/subjects/{subject_uuid:uuid}", subject_resource)
    return app
