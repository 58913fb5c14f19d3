"""Permission level entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PermissionLevel:
    """Named access level. Lower precedence means more access."""

    id: UUID
    name: str
    precedence: int
