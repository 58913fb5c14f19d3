"""Resource type repository port."""

from typing import Protocol
from uuid import UUID

from permsvc.domain.entities import ResourceType


class ResourceTypeRepository(Protocol):
    """Port for resource type persistence.

    Name lookups compare normalized names (see normalize_resource_type_name).
    """

    async def get_by_id(self, id: UUID) -> ResourceType | None: ...

    async def get_by_name(self, name: str) -> ResourceType | None: ...

    async def get_duplicate(self, id: UUID, name: str) -> ResourceType | None: ...

    async def list(self, *, name: str | None = None) -> list[ResourceType]: ...

    async def add(self, name: str, description: str | None) -> ResourceType: ...

    async def update(
        self, id: UUID, name: str, description: str | None
    ) -> ResourceType | None: ...

    async def delete(self, id: UUID) -> int: ...
