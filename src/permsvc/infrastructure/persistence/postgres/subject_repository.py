"""PostgreSQL subject repository implementation."""

from uuid import UUID, uuid4

from psycopg import AsyncConnection

from permsvc.domain.entities import Subject
from permsvc.domain.value_objects import SubjectType


def _row_to_subject(r: tuple) -> Subject:
    return Subject(id=r[0], subject_id=r[1], subject_type=SubjectType(r[2]))


class PostgresSubjectRepository:
    """Subject repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, id: UUID) -> Subject | None:
        """Get subject by internal id."""
        cur = await self._conn.execute(
            "SELECT id, subject_id, subject_type FROM subjects WHERE id = %s",
            (id,),
        )
        r = await cur.fetchone()
        return _row_to_subject(r) if r else None

    async def get(self, subject_id: str, subject_type: SubjectType) -> Subject | None:
        """Get subject by external id and type."""
        cur = await self._conn.execute(
            "SELECT id, subject_id, subject_type FROM subjects "
            "WHERE subject_id = %s AND subject_type = %s",
            (subject_id, str(subject_type)),
        )
        r = await cur.fetchone()
        return _row_to_subject(r) if r else None

    async def get_by_external_id(self, subject_id: str) -> Subject | None:
        """Get subject by external id regardless of type."""
        cur = await self._conn.execute(
            "SELECT id, subject_id, subject_type FROM subjects WHERE subject_id = %s",
            (subject_id,),
        )
        r = await cur.fetchone()
        return _row_to_subject(r) if r else None

    async def external_id_exists(self, subject_id: str, exclude_id: UUID | None = None) -> bool:
        """Check whether any other subject already uses the external id."""
        if exclude_id is None:
            cur = await self._conn.execute(
                "SELECT count(*) FROM subjects WHERE subject_id = %s",
                (subject_id,),
            )
        else:
            cur = await self._conn.execute(
                "SELECT count(*) FROM subjects WHERE id != %s AND subject_id = %s",
                (exclude_id, subject_id),
            )
        r = await cur.fetchone()
        return r[0] > 0

    async def add(self, subject_id: str, subject_type: SubjectType) -> Subject:
        """Insert subject."""
        cur = await self._conn.execute(
            "INSERT INTO subjects (id, subject_id, subject_type) VALUES (%s, %s, %s) "
            "RETURNING id, subject_id, subject_type",
            (uuid4(), subject_id, str(subject_type)),
        )
        return _row_to_subject(await cur.fetchone())

    async def update(
        self, id: UUID, subject_id: str, subject_type: SubjectType
    ) -> Subject | None:
        """Update subject's external id and type."""
        cur = await self._conn.execute(
            "UPDATE subjects SET subject_id = %s, subject_type = %s WHERE id = %s "
            "RETURNING id, subject_id, subject_type",
            (subject_id, str(subject_type), id),
        )
        r = await cur.fetchone()
        return _row_to_subject(r) if r else None

    async def delete(self, id: UUID) -> int:
        """Delete subject; its permissions cascade. Returns rows deleted."""
        cur = await self._conn.execute("DELETE FROM subjects WHERE id = %s", (id,))
        return cur.rowcount

    async def list(
        self,
        *,
        subject_type: SubjectType | None = None,
        subject_id: str | None = None,
    ) -> list[Subject]:
        """List subjects, optionally filtered by type and external id."""
        conditions: list[str] = []
        params: list[object] = []
        if subject_type is not None:
            conditions.append("subject_type = %s")
            params.append(str(subject_type))
        if subject_id is not None:
            conditions.append("subject_id = %s")
            params.append(subject_id)
        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
        cur = await self._conn.execute(
            "SELECT id, subject_id, subject_type FROM subjects"
            f"{where} ORDER BY subject_type, subject_id",
            params,
        )
        rows = await cur.fetchall()
        return [_row_to_subject(r) for r in rows]
