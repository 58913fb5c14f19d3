"""Resource entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Resource:
    """Access-controlled object. Names are unique within a resource type."""

    id: UUID
    name: str
    resource_type: str
