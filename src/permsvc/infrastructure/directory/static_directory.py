"""Fixed in-memory group directory for tests and local development."""

from collections.abc import Mapping, Sequence

from permsvc.application.ports import GroupInfo
from permsvc.domain.entities import Permission


class StaticGroupDirectory:
    """Group directory answering from fixed mappings.

    Subjects missing from the mappings belong to no groups and have no source.
    """

    def __init__(
        self,
        groups: Mapping[str, Sequence[GroupInfo]] | None = None,
        sources: Mapping[str, str] | None = None,
    ) -> None:
        self._groups = {k: list(v) for k, v in (groups or {}).items()}
        self._sources = dict(sources or {})

    async def groups_for_subject(self, subject_id: str) -> list[GroupInfo]:
        return list(self._groups.get(subject_id, []))

    async def add_source_ids(self, permissions: Sequence[Permission]) -> None:
        for p in permissions:
            source_id = self._sources.get(p.subject.subject_id)
            if source_id is not None:
                p.subject.source_id = source_id
