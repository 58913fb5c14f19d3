"""Permission level repository port."""

from typing import Protocol

from permsvc.domain.entities import PermissionLevel


class PermissionLevelRepository(Protocol):
    """Port for the read-only permission level catalog."""

    async def get_by_name(self, name: str) -> PermissionLevel | None: ...

    async def list_all(self) -> list[PermissionLevel]: ...
