"""Permission mutations - grant, revoke and copy.

Every method works inside the unit of work it is given; the caller owns the
transaction. The one-grant-per-(subject, resource) invariant is kept by the
repository's insert-or-update primitive rather than by locking here.
"""

from collections.abc import Sequence

import structlog

from permsvc.application.ports import UnitOfWork
from permsvc.application.services.level_registry import PermissionLevelRegistry
from permsvc.domain.entities import Permission, Resource, Subject
from permsvc.domain.exceptions import ClientError, InvariantViolation, NotFound
from permsvc.domain.value_objects import ResourceRef, SubjectRef

logger = structlog.get_logger(__name__)


class PermissionMutationEngine:
    """Applies permission writes within a single transaction."""

    def __init__(self, level_registry: PermissionLevelRegistry) -> None:
        self._levels = level_registry

    async def get_or_add_subject(self, uow: UnitOfWork, ref: SubjectRef) -> Subject:
        """Return the subject with this external id, creating it if needed.

        External ids are unique across subject types, so an existing subject of
        another type is a client error rather than a new row.
        """
        subject = await uow.subjects.get_by_external_id(ref.subject_id)
        if subject is None:
            subject = await uow.subjects.add(ref.subject_id, ref.subject_type)
            logger.info(
                "subject_added",
                subject_id=ref.subject_id,
                subject_type=str(ref.subject_type),
            )
            return subject
        if subject.subject_type != ref.subject_type:
            raise ClientError(
                f"incorrect type for subject, {ref.subject_id}: {ref.subject_type}"
            )
        return subject

    async def get_or_add_resource(self, uow: UnitOfWork, ref: ResourceRef) -> Resource:
        """Return the named resource, creating it under an existing resource type."""
        resource_type = await uow.resource_types.get_by_name(ref.resource_type)
        if resource_type is None:
            raise ClientError(f"no resource type named {ref.resource_type}")
        resource = await uow.resources.get_by_name(ref.name, resource_type.id)
        if resource is None:
            resource = await uow.resources.add(ref.name, resource_type.id)
            logger.info(
                "resource_added",
                resource_type=resource_type.name,
                resource_name=ref.name,
            )
        return resource

    async def grant(
        self,
        uow: UnitOfWork,
        subject_ref: SubjectRef,
        resource_ref: ResourceRef,
        permission_level: str,
    ) -> Permission:
        """Set the subject's level on the resource, replacing any existing grant."""
        subject = await self.get_or_add_subject(uow, subject_ref)
        resource = await self.get_or_add_resource(uow, resource_ref)
        level = await self._levels.level_by_name(uow, permission_level)

        permission = await uow.permissions.upsert(subject.id, resource.id, level.id)
        if permission is None:
            raise InvariantViolation(
                f"unable to look up permission after upsert: {subject.id}/{resource.id}"
            )
        logger.info(
            "permission_granted",
            permission_id=str(permission.id),
            subject_id=subject.subject_id,
            resource_type=resource.resource_type,
            resource_name=resource.name,
            permission_level=level.name,
        )
        return permission

    async def revoke(
        self,
        uow: UnitOfWork,
        subject_ref: SubjectRef,
        resource_ref: ResourceRef,
    ) -> None:
        """Delete the subject's grant on the resource.

        Each part of the (resource type, resource, subject, permission) chain
        must exist; the first missing one is reported as NotFound.
        """
        resource_type = await uow.resource_types.get_by_name(resource_ref.resource_type)
        if resource_type is None:
            raise NotFound("resource type", resource_ref.resource_type)

        resource = await uow.resources.get_by_name(resource_ref.name, resource_type.id)
        if resource is None:
            raise NotFound("resource", f"{resource_ref.resource_type}/{resource_ref.name}")

        subject = await uow.subjects.get(subject_ref.subject_id, subject_ref.subject_type)
        if subject is None:
            raise NotFound("subject", f"{subject_ref.subject_type}/{subject_ref.subject_id}")

        permission = await uow.permissions.get(subject.id, resource.id)
        if permission is None:
            raise NotFound(
                "permission",
                f"{resource_ref.resource_type}/{resource_ref.name}:"
                f"{subject_ref.subject_type}/{subject_ref.subject_id}",
            )

        count = await uow.permissions.delete(permission.id)
        if count == 0:
            raise InvariantViolation(f"no permissions deleted for id {permission.id}")
        if count > 1:
            raise InvariantViolation(f"multiple permissions deleted for id {permission.id}")
        logger.info(
            "permission_revoked",
            permission_id=str(permission.id),
            subject_id=subject.subject_id,
            resource_type=resource.resource_type,
            resource_name=resource.name,
        )

    async def copy_permissions(
        self,
        uow: UnitOfWork,
        source_ref: SubjectRef,
        dest_refs: Sequence[SubjectRef],
    ) -> list[Subject]:
        """Copy every grant held by the source onto each destination.

        A destination never loses access: where it already holds a grant on
        the same resource, the more permissive of the two levels is kept.
        """
        source = await self.get_or_add_subject(uow, source_ref)
        destinations: list[Subject] = []
        for ref in dest_refs:
            dest = await self.get_or_add_subject(uow, ref)
            destinations.append(dest)
            if dest.id == source.id:
                continue
            await uow.permissions.copy(source.id, dest.id)
            logger.info(
                "permissions_copied",
                source_subject_id=source.subject_id,
                dest_subject_id=dest.subject_id,
            )
        return destinations
