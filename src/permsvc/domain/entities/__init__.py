"""Domain entities."""

from permsvc.domain.entities.permission import (
    AbbreviatedPermission,
    Permission,
    PermissionCandidate,
)
from permsvc.domain.entities.permission_level import PermissionLevel
from permsvc.domain.entities.resource import Resource
from permsvc.domain.entities.resource_type import ResourceType
from permsvc.domain.entities.subject import Subject

__all__ = [
    "AbbreviatedPermission",
    "Permission",
    "PermissionCandidate",
    "PermissionLevel",
    "Resource",
    "ResourceType",
    "Subject",
]
