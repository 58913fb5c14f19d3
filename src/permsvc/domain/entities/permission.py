"""Permission entities - subject holds a level on a resource."""

from dataclasses import dataclass
from uuid import UUID

from permsvc.domain.entities.resource import Resource
from permsvc.domain.entities.subject import Subject


@dataclass
class Permission:
    """Grant of a permission level to one subject on one resource."""

    id: UUID
    subject: Subject
    resource: Resource
    permission_level: str


@dataclass
class AbbreviatedPermission:
    """Permission without subject details."""

    id: UUID
    resource_name: str
    resource_type: str
    permission_level: str


@dataclass(frozen=True)
class PermissionCandidate:
    """Stored permission together with the precedence of its level."""

    permission: Permission
    precedence: int
