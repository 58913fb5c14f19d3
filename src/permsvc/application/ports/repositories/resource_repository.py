"""Resource repository port."""

from typing import Protocol
from uuid import UUID

from permsvc.domain.entities import Resource


class ResourceRepository(Protocol):
    """Port for resource persistence."""

    async def get_by_id(self, id: UUID) -> Resource | None: ...

    async def get_by_name(self, name: str, resource_type_id: UUID) -> Resource | None: ...

    async def get_duplicate(self, id: UUID, name: str) -> Resource | None: ...

    async def count_of_type(self, resource_type_id: UUID) -> int: ...

    async def list(
        self,
        *,
        resource_type_name: str | None = None,
        resource_name: str | None = None,
    ) -> list[Resource]: ...

    async def add(self, name: str, resource_type_id: UUID) -> Resource: ...

    async def update(self, id: UUID, name: str) -> Resource | None: ...

    async def delete(self, id: UUID) -> int: ...
