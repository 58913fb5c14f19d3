"""Effective permission lookup use cases."""

from permsvc.application.services import (
    PermissionQueryEngine,
    SourceIdEnricher,
    SubjectIdentityResolver,
)
from permsvc.domain.entities import AbbreviatedPermission, Permission
from permsvc.domain.value_objects import SubjectType


class _SubjectLookup:
    """Shared plumbing: type check, identity expansion, one read transaction.

    The group directory is consulted between the type-check transaction and
    the read transaction, never while a connection is held.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        identity_resolver: SubjectIdentityResolver,
        query_engine: PermissionQueryEngine,
        enricher: SourceIdEnricher,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = identity_resolver
        self._engine = query_engine
        self._enricher = enricher

    async def _identities(
        self, subject_type: SubjectType, subject_id: str, lookup: bool
    ) -> list[str]:
        async with self._uow_factory() as uow:
            await self._resolver.verify_subject_type(uow, subject_type, subject_id)
        return await self._resolver.resolve(subject_type, subject_id, lookup)


class LookupBySubjectUseCase(_SubjectLookup):
    """Effective permissions of a subject on all resources."""

    async def execute(
        self,
        subject_type: SubjectType,
        subject_id: str,
        lookup: bool = False,
        min_level: str | None = None,
    ) -> list[Permission]:
        identities = await self._identities(subject_type, subject_id, lookup)
        async with self._uow_factory() as uow:
            permissions = await self._engine.effective_permissions(uow, identities, min_level)
        await self._enricher.enrich(permissions)
        return permissions


class LookupBySubjectAndResourceTypeUseCase(_SubjectLookup):
    """Effective permissions of a subject on resources of one type."""

    async def execute(
        self,
        subject_type: SubjectType,
        subject_id: str,
        resource_type_name: str,
        lookup: bool = False,
        min_level: str | None = None,
    ) -> list[Permission]:
        identities = await self._identities(subject_type, subject_id, lookup)
        async with self._uow_factory() as uow:
            permissions = await self._engine.effective_permissions_for_type(
                uow, identities, resource_type_name, min_level
            )
        await self._enricher.enrich(permissions)
        return permissions


class LookupBySubjectAndResourceUseCase(_SubjectLookup):
    """Effective permission of a subject on a single resource."""

    async def execute(
        self,
        subject_type: SubjectType,
        subject_id: str,
        resource_type_name: str,
        resource_name: str,
        lookup: bool = False,
        min_level: str | None = None,
    ) -> list[Permission]:
        identities = await self._identities(subject_type, subject_id, lookup)
        async with self._uow_factory() as uow:
            permissions = await self._engine.effective_permissions_for_resource(
                uow, identities, resource_type_name, resource_name, min_level
            )
        await self._enricher.enrich(permissions)
        return permissions


class AbbreviatedLookupUseCase(_SubjectLookup):
    """Type-scoped effective permissions without subject details.

    The payload carries no subjects, so no source enrichment is done.
    """

    async def execute(
        self,
        subject_type: SubjectType,
        subject_id: str,
        resource_type_name: str,
        lookup: bool = False,
        min_level: str | None = None,
    ) -> list[AbbreviatedPermission]:
        identities = await self._identities(subject_type, subject_id, lookup)
        async with self._uow_factory() as uow:
            return await self._engine.abbreviated_effective_permissions_for_type(
                uow, identities, resource_type_name, min_level
            )
