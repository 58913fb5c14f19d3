"""Subject catalog use cases."""

from uuid import UUID

from permsvc.domain.entities import Subject
from permsvc.domain.exceptions import Conflict, InvariantViolation, NotFound
from permsvc.domain.value_objects import SubjectRef, SubjectType


class SubjectCatalog:
    """Create, update and remove subjects. Deleting a subject drops its grants.

    External ids are unique across all subject types: a user and a group can
    never share one.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def list(
        self,
        subject_type: SubjectType | None = None,
        subject_id: str | None = None,
    ) -> list[Subject]:
        async with self._uow_factory() as uow:
            return await uow.subjects.list(subject_type=subject_type, subject_id=subject_id)

    async def add(self, ref: SubjectRef) -> Subject:
        async with self._uow_factory() as uow:
            if await uow.subjects.external_id_exists(ref.subject_id):
                raise Conflict(f"subject, {ref.subject_id}, already exists")
            return await uow.subjects.add(ref.subject_id, ref.subject_type)

    async def update(self, id: UUID, ref: SubjectRef) -> Subject:
        async with self._uow_factory() as uow:
            if await uow.subjects.get_by_id(id) is None:
                raise NotFound("subject", str(id))
            if await uow.subjects.external_id_exists(ref.subject_id, exclude_id=id):
                raise Conflict(f"another subject with ID, {ref.subject_id}, already exists")
            subject = await uow.subjects.update(id, ref.subject_id, ref.subject_type)
            if subject is None:
                raise InvariantViolation(f"subject disappeared during update: {id}")
        return subject

    async def delete(self, id: UUID) -> None:
        async with self._uow_factory() as uow:
            if await uow.subjects.get_by_id(id) is None:
                raise NotFound("subject", str(id))
            count = await uow.subjects.delete(id)
            if count != 1:
                raise InvariantViolation(f"{count} subjects deleted for id {id}")

    async def delete_by_external_id(
        self, subject_id: str, subject_type: SubjectType | None = None
    ) -> None:
        async with self._uow_factory() as uow:
            if subject_type is None:
                subject = await uow.subjects.get_by_external_id(subject_id)
            else:
                subject = await uow.subjects.get(subject_id, subject_type)
            if subject is None:
                raise NotFound("subject", subject_id)
            count = await uow.subjects.delete(subject.id)
            if count != 1:
                raise InvariantViolation(f"{count} subjects deleted for id {subject.id}")
