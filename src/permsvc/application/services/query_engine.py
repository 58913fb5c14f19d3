"""Effective permission queries.

A subject can reach several grants on the same resource: its own grant and
one grant per group it belongs to. Storage keeps all of them; queries collapse
them so that callers see exactly one permission per resource, the most
permissive one reachable.
"""

from collections.abc import Iterable, Sequence

from permsvc.application.ports import UnitOfWork
from permsvc.application.services.level_registry import (
    PermissionLevelRegistry,
    PrecedenceFloor,
)
from permsvc.domain.entities import (
    AbbreviatedPermission,
    Permission,
    PermissionCandidate,
)


def _rank(candidate: PermissionCandidate) -> tuple[int, str]:
    # Ties on precedence go to the lowest permission id.
    return (candidate.precedence, str(candidate.permission.id))


def collapse_effective(
    candidates: Iterable[PermissionCandidate],
    floor: PrecedenceFloor | None = None,
) -> list[Permission]:
    """Keep the most permissive candidate per resource, ordered by resource name.

    Candidates rejected by the floor are discarded before grouping, so a
    resource whose only grants are below the floor does not appear at all.
    """
    best: dict[object, PermissionCandidate] = {}
    for candidate in candidates:
        if floor is not None and not floor.admits(candidate.precedence):
            continue
        key = candidate.permission.resource.id
        current = best.get(key)
        if current is None or _rank(candidate) < _rank(current):
            best[key] = candidate

    permissions = [c.permission for c in best.values()]
    permissions.sort(key=lambda p: (p.resource.name, str(p.resource.id)))
    return permissions


class PermissionQueryEngine:
    """Answers "what can these identities do" for the four query shapes."""

    def __init__(self, level_registry: PermissionLevelRegistry) -> None:
        self._levels = level_registry

    async def effective_permissions(
        self,
        uow: UnitOfWork,
        identities: Sequence[str],
        min_level: str | None = None,
    ) -> list[Permission]:
        """Effective permissions on every resource."""
        floor = await self._levels.precedence_floor(uow, min_level)
        if not identities:
            return []
        candidates = await uow.permissions.candidates_for_subjects(identities)
        return collapse_effective(candidates, floor)

    async def effective_permissions_for_type(
        self,
        uow: UnitOfWork,
        identities: Sequence[str],
        resource_type_name: str,
        min_level: str | None = None,
    ) -> list[Permission]:
        """Effective permissions on resources of one type; unknown type yields []."""
        floor = await self._levels.precedence_floor(uow, min_level)
        resource_type = await uow.resource_types.get_by_name(resource_type_name)
        if resource_type is None or not identities:
            return []
        candidates = await uow.permissions.candidates_for_subjects(
            identities, resource_type_id=resource_type.id
        )
        return collapse_effective(candidates, floor)

    async def effective_permissions_for_resource(
        self,
        uow: UnitOfWork,
        identities: Sequence[str],
        resource_type_name: str,
        resource_name: str,
        min_level: str | None = None,
    ) -> list[Permission]:
        """Effective permission on one resource; unknown type or resource yields []."""
        floor = await self._levels.precedence_floor(uow, min_level)
        resource_type = await uow.resource_types.get_by_name(resource_type_name)
        if resource_type is None:
            return []
        resource = await uow.resources.get_by_name(resource_name, resource_type.id)
        if resource is None or not identities:
            return []
        candidates = await uow.permissions.candidates_for_subjects(
            identities, resource_id=resource.id
        )
        return collapse_effective(candidates, floor)

    async def abbreviated_effective_permissions_for_type(
        self,
        uow: UnitOfWork,
        identities: Sequence[str],
        resource_type_name: str,
        min_level: str | None = None,
    ) -> list[AbbreviatedPermission]:
        """Type-scoped effective permissions without subject details."""
        permissions = await self.effective_permissions_for_type(
            uow, identities, resource_type_name, min_level
        )
        return [
            AbbreviatedPermission(
                id=p.id,
                resource_name=p.resource.name,
                resource_type=p.resource.resource_type,
                permission_level=p.permission_level,
            )
            for p in permissions
        ]
