"""Domain value objects."""

from permsvc.domain.value_objects.refs import ResourceRef, SubjectRef
from permsvc.domain.value_objects.resource_type_name import normalize_resource_type_name
from permsvc.domain.value_objects.subject_type import SubjectType

__all__ = [
    "ResourceRef",
    "SubjectRef",
    "SubjectType",
    "normalize_resource_type_name",
]
