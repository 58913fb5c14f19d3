"""Group directory port - external system of record for group membership."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from permsvc.domain.entities import Permission


@dataclass(frozen=True)
class GroupInfo:
    """Group a subject belongs to."""

    id: str
    name: str


class GroupDirectory(Protocol):
    """Read-only view of group memberships and subject sources.

    Implementations raise DirectoryUnavailable when the backend cannot be
    reached.
    """

    async def groups_for_subject(self, subject_id: str) -> list[GroupInfo]:
        """Direct group memberships of a subject within the configured prefix."""
        ...

    async def add_source_ids(self, permissions: Sequence[Permission]) -> None:
        """Annotate each permission's subject with its identity source, in place."""
        ...
