"""Repository ports."""

from permsvc.application.ports.repositories.permission_level_repository import (
    PermissionLevelRepository,
)
from permsvc.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from permsvc.application.ports.repositories.resource_repository import (
    ResourceRepository,
)
from permsvc.application.ports.repositories.resource_type_repository import (
    ResourceTypeRepository,
)
from permsvc.application.ports.repositories.subject_repository import SubjectRepository

__all__ = [
    "PermissionLevelRepository",
    "PermissionRepository",
    "ResourceRepository",
    "ResourceTypeRepository",
    "SubjectRepository",
]
