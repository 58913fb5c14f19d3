"""Resource type entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class ResourceType:
    """Category of resources, e.g. app or analysis."""

    id: UUID
    name: str
    description: str | None = None
