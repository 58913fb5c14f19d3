"""Subject repository port."""

from typing import Protocol
from uuid import UUID

from permsvc.domain.entities import Subject
from permsvc.domain.value_objects import SubjectType


class SubjectRepository(Protocol):
    """Port for subject persistence."""

    async def get_by_id(self, id: UUID) -> Subject | None: ...

    async def get(self, subject_id: str, subject_type: SubjectType) -> Subject | None: ...

    async def get_by_external_id(self, subject_id: str) -> Subject | None: ...

    async def external_id_exists(self, subject_id: str, exclude_id: UUID | None = None) -> bool: ...

    async def list(
        self,
        *,
        subject_type: SubjectType | None = None,
        subject_id: str | None = None,
    ) -> list[Subject]: ...

    async def add(self, subject_id: str, subject_type: SubjectType) -> Subject: ...

    async def update(
        self, id: UUID, subject_id: str, subject_type: SubjectType
    ) -> Subject | None: ...

    async def delete(self, id: UUID) -> int: ...
