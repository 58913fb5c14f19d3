"""Grouper-backed group directory.

Reads the Grouper database directly. The client is read-only, so no explicit
transactions are used.
"""

from collections.abc import Sequence

import psycopg
from psycopg_pool import AsyncConnectionPool

from permsvc.application.ports import GroupInfo
from permsvc.domain.entities import Permission
from permsvc.domain.exceptions import DirectoryUnavailable


class GrouperDirectory:
    """Group memberships and subject sources from Grouper views."""

    def __init__(self, pool: AsyncConnectionPool, folder_name_prefix: str = "") -> None:
        self._pool = pool
        self._prefix = folder_name_prefix

    async def groups_for_subject(self, subject_id: str) -> list[GroupInfo]:
        """Direct memberships of the subject in groups under the folder prefix."""
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "SELECT group_id, group_name FROM grouper_memberships_v "
                    "WHERE subject_id = %s AND group_name LIKE %s "
                    "AND list_name = 'members'",
                    (subject_id, f"{self._prefix}%"),
                )
                rows = await cur.fetchall()
        except psycopg.Error as e:
            raise DirectoryUnavailable(f"grouper membership lookup failed: {e}") from e
        return [GroupInfo(id=r[0], name=r[1]) for r in rows]

    async def add_source_ids(self, permissions: Sequence[Permission]) -> None:
        """Set subject.source_id for every subject Grouper knows about."""
        subject_ids = list({p.subject.subject_id for p in permissions})
        if not subject_ids:
            return
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "SELECT subject_id, subject_source FROM grouper_members "
                    "WHERE subject_id = ANY(%s)",
                    (subject_ids,),
                )
                rows = await cur.fetchall()
        except psycopg.Error as e:
            raise DirectoryUnavailable(f"grouper source lookup failed: {e}") from e
        sources = {r[0]: r[1] for r in rows}
        for p in permissions:
            source_id = sources.get(p.subject.subject_id)
            if source_id is not None:
                p.subject.source_id = source_id
