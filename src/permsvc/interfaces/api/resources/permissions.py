"""Permissions API resources."""

import falcon
import falcon.asgi

from permsvc.application.use_cases.permission.copy_permissions import CopyPermissionsUseCase
from permsvc.application.use_cases.permission.grant_permission import (
    GrantPermissionUseCase,
    GrantResult,
)
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
from permsvc.domain.exceptions import ClientError
from permsvc.domain.value_objects import ResourceRef, SubjectRef, SubjectType
from permsvc.interfaces.api.requests import (
    ENRICHMENT_WARNING,
    read_object,
    required_str,
    resource_ref_from,
    subject_ref_from,
)
from permsvc.interfaces.api.serializers import (
    abbreviated_permission_to_dict,
    permission_to_dict,
    subject_to_dict,
)


def _lookup_params(req: falcon.asgi.Request) -> tuple[bool, str | None]:
    lookup = req.get_param_as_bool("lookup", default=False)
    min_level = req.get_param("min_level") or None
    return lookup, min_level


def _grant_response(resp: falcon.asgi.Response, result: GrantResult) -> None:
    resp.media = permission_to_dict(result.permission)
    resp.status = falcon.HTTP_200
    if not result.enriched:
        resp.set_header("Warning", ENRICHMENT_WARNING)


class PermissionsResource:
    """GET/POST /v1/permissions - list all grants, grant a permission."""

    def __init__(
        self,
        list_permissions: ListPermissionsUseCase,
        grant_permission: GrantPermissionUseCase,
    ) -> None:
        self._list = list_permissions
        self._grant = grant_permission

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List every stored permission."""
        permissions = await self._list.execute()
        resp.media = {"permissions": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Grant a permission, creating the subject and resource if needed."""
        body = await read_object(req)
        result = await self._grant.execute(
            subject_ref_from(body.get("subject")),
            resource_ref_from(body.get("resource")),
            required_str(body, "permission_level"),
        )
        _grant_response(resp, result)


class ResourcePermissionsResource:
    """GET /v1/permissions/resources/{resource_type}/{resource_name}."""

    def __init__(self, list_resource_permissions: ListResourcePermissionsUseCase) -> None:
        self._list = list_resource_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_type: str,
        resource_name: str,
    ) -> None:
        """List every grant on one resource."""
        permissions = await self._list.execute(resource_type, resource_name)
        resp.media = {"permissions": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200


class SubjectResourcePermissionResource:
    """PUT/DELETE /v1/permissions/resources/{rt}/{rn}/subjects/{st}/{sid}."""

    def __init__(
        self,
        grant_permission: GrantPermissionUseCase,
        revoke_permission: RevokePermissionUseCase,
    ) -> None:
        self._grant = grant_permission
        self._revoke = revoke_permission

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_type: str,
        resource_name: str,
        subject_type: str,
        subject_id: str,
    ) -> None:
        """Set the subject's level on the resource."""
        body = await read_object(req)
        result = await self._grant.execute(
            SubjectRef(subject_id, SubjectType.parse(subject_type)),
            ResourceRef(resource_name, resource_type),
            required_str(body, "permission_level"),
        )
        _grant_response(resp, result)

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_type: str,
        resource_name: str,
        subject_type: str,
        subject_id: str,
    ) -> None:
        """Revoke the subject's grant on the resource."""
        await self._revoke.execute(
            SubjectRef(subject_id, SubjectType.parse(subject_type)),
            ResourceRef(resource_name, resource_type),
        )
        resp.status = falcon.HTTP_200
        resp.media = {}


class CopyPermissionsResource:
    """POST /v1/permissions/copy/subjects/{subject_type}/{subject_id}."""

    def __init__(self, copy_permissions: CopyPermissionsUseCase) -> None:
        self._copy = copy_permissions

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_type: str,
        subject_id: str,
    ) -> None:
        """Copy the subject's grants onto the subjects listed in the body."""
        body = await read_object(req)
        subjects = body.get("subjects")
        if not isinstance(subjects, list):
            raise ClientError("missing required field: subjects")
        destinations = await self._copy.execute(
            SubjectRef(subject_id, SubjectType.parse(subject_type)),
            [subject_ref_from(s) for s in subjects],
        )
        resp.media = {"subjects": [subject_to_dict(s) for s in destinations]}
        resp.status = falcon.HTTP_200


class SubjectPermissionsResource:
    """GET effective permissions of a subject.

    Routes:
      /v1/permissions/subjects/{st}/{sid}
      /v1/permissions/subjects/{st}/{sid}/{rt}             (suffix "type")
      /v1/permissions/subjects/{st}/{sid}/{rt}/{rn}        (suffix "resource")
    """

    def __init__(
        self,
        by_subject: LookupBySubjectUseCase,
        by_subject_and_type: LookupBySubjectAndResourceTypeUseCase,
        by_subject_and_resource: LookupBySubjectAndResourceUseCase,
    ) -> None:
        self._by_subject = by_subject
        self._by_type = by_subject_and_type
        self._by_resource = by_subject_and_resource

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_type: str,
        subject_id: str,
    ) -> None:
        lookup, min_level = _lookup_params(req)
        permissions = await self._by_subject.execute(
            SubjectType.parse(subject_type), subject_id, lookup, min_level
        )
        resp.media = {"permissions": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200

    async def on_get_type(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_type: str,
        subject_id: str,
        resource_type: str,
    ) -> None:
        lookup, min_level = _lookup_params(req)
        permissions = await self._by_type.execute(
            SubjectType.parse(subject_type), subject_id, resource_type, lookup, min_level
        )
        resp.media = {"permissions": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200

    async def on_get_resource(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_type: str,
        subject_id: str,
        resource_type: str,
        resource_name: str,
    ) -> None:
        lookup, min_level = _lookup_params(req)
        permissions = await self._by_resource.execute(
            SubjectType.parse(subject_type),
            subject_id,
            resource_type,
            resource_name,
            lookup,
            min_level,
        )
        resp.media = {"permissions": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200


class AbbreviatedPermissionsResource:
    """GET /v1/permissions/abbreviated/subjects/{st}/{sid}/{rt}."""

    def __init__(self, abbreviated_lookup: AbbreviatedLookupUseCase) -> None:
        self._lookup = abbreviated_lookup

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_type: str,
        subject_id: str,
        resource_type: str,
    ) -> None:
        lookup, min_level = _lookup_params(req)
        permissions = await self._lookup.execute(
            SubjectType.parse(subject_type), subject_id, resource_type, lookup, min_level
        )
        resp.media = {
            "permissions": [abbreviated_permission_to_dict(p) for p in permissions]
        }
        resp.status = falcon.HTTP_200
