"""Permission repository port."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from permsvc.domain.entities import Permission, PermissionCandidate


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def candidates_for_subjects(
        self,
        subject_ids: Sequence[str],
        *,
        resource_type_id: UUID | None = None,
        resource_id: UUID | None = None,
    ) -> list[PermissionCandidate]: ...

    async def list_all(self) -> list[Permission]: ...

    async def list_for_resource(
        self, resource_type_name: str, resource_name: str
    ) -> list[Permission]: ...

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def get(self, subject_id: UUID, resource_id: UUID) -> Permission | None: ...

    async def upsert(
        self, subject_id: UUID, resource_id: UUID, permission_level_id: UUID
    ) -> Permission | None: ...

    async def copy(self, source_subject_id: UUID, dest_subject_id: UUID) -> None: ...

    async def delete(self, permission_id: UUID) -> int: ...
