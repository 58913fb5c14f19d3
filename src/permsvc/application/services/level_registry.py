"""Permission level registry - precedence lookups for resolution."""

from dataclasses import dataclass

from permsvc.application.ports import UnitOfWork
from permsvc.domain.entities import PermissionLevel
from permsvc.domain.exceptions import UnknownPermissionLevel


@dataclass(frozen=True)
class PrecedenceFloor:
    """Admits levels at least as permissive as a reference level."""

    level: PermissionLevel

    def admits(self, precedence: int) -> bool:
        return precedence <= self.level.precedence


class PermissionLevelRegistry:
    """Read-only access to the permission level catalog."""

    async def level_by_name(self, uow: UnitOfWork, name: str) -> PermissionLevel:
        """Look up a level by name. Raises UnknownPermissionLevel if absent."""
        level = await uow.permission_levels.get_by_name(name)
        if level is None:
            raise UnknownPermissionLevel(name)
        return level

    async def precedence_floor(
        self, uow: UnitOfWork, name: str | None
    ) -> PrecedenceFloor | None:
        """Build the "at least as permissive as name" filter, or None without a name."""
        if name is None:
            return None
        return PrecedenceFloor(await self.level_by_name(uow, name))
