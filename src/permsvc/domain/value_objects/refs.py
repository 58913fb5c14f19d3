"""References to subjects and resources by their external names."""

from dataclasses import dataclass

from permsvc.domain.value_objects.subject_type import SubjectType


@dataclass(frozen=True)
class SubjectRef:
    """Subject as named by callers: external id plus type."""

    subject_id: str
    subject_type: SubjectType


@dataclass(frozen=True)
class ResourceRef:
    """Resource as named by callers: resource name within a resource type."""

    name: str
    resource_type: str
