"""Subject entity - user or group identity."""

from dataclasses import dataclass
from uuid import UUID

from permsvc.domain.value_objects import SubjectType


@dataclass
class Subject:
    """Subject known to the permissions database.

    source_id is filled in from the group directory after a lookup and is never
    persisted.
    """

    id: UUID
    subject_id: str
    subject_type: SubjectType
    source_id: str | None = None
