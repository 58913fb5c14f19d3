"""Subject identity resolver - expands a subject into the identities it acts as."""

import structlog

from permsvc.application.ports import GroupDirectory, UnitOfWork
from permsvc.domain.entities import Subject
from permsvc.domain.exceptions import ClientError
from permsvc.domain.value_objects import SubjectType

logger = structlog.get_logger(__name__)


class SubjectIdentityResolver:
    """Resolves a (subject type, external id) pair into external identities.

    Only one level of group membership is followed: the groups a user belongs
    to are included, the groups those groups belong to are not.
    """

    def __init__(self, group_directory: GroupDirectory) -> None:
        self._directory = group_directory

    async def verify_subject_type(
        self, uow: UnitOfWork, subject_type: SubjectType, subject_id: str
    ) -> Subject | None:
        """Reject a subject type that disagrees with the type on record.

        Returns the stored subject, or None when the external id is unknown.
        """
        subject = await uow.subjects.get_by_external_id(subject_id)
        if subject is not None and subject.subject_type != subject_type:
            raise ClientError(f"incorrect type for subject, {subject_id}: {subject_type}")
        return subject

    async def resolve(
        self, subject_type: SubjectType, subject_id: str, lookup: bool
    ) -> list[str]:
        """Return the subject id followed by its direct group ids, without duplicates."""
        if not lookup or subject_type != SubjectType.USER:
            return [subject_id]

        groups = await self._directory.groups_for_subject(subject_id)
        identities = [subject_id]
        for group in groups:
            if group.id not in identities:
                identities.append(group.id)
        logger.debug("subject_identities_resolved", subject_id=subject_id, groups=len(groups))
        return identities
