"""PostgreSQL permission repository implementation."""

from collections.abc import Sequence
from uuid import UUID, uuid4

from psycopg import AsyncConnection

from permsvc.domain.entities import (
    Permission,
    PermissionCandidate,
    Resource,
    Subject,
)
from permsvc.domain.value_objects import SubjectType, normalize_resource_type_name

# Column order is relied on by _row_to_permission.
_SELECT_PERMISSION = (
    "SELECT p.id, s.id, s.subject_id, s.subject_type, r.id, r.name, rt.name, "
    "pl.name, pl.precedence "
    "FROM permissions p "
    "JOIN permission_levels pl ON p.permission_level_id = pl.id "
    "JOIN subjects s ON p.subject_id = s.id "
    "JOIN resources r ON p.resource_id = r.id "
    "JOIN resource_types rt ON r.resource_type_id = rt.id"
)


def _row_to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        subject=Subject(id=r[1], subject_id=r[2], subject_type=SubjectType(r[3])),
        resource=Resource(id=r[4], name=r[5], resource_type=r[6]),
        permission_level=r[7],
    )


def _build_candidate_conditions(
    subject_ids: Sequence[str],
    resource_type_id: UUID | None = None,
    resource_id: UUID | None = None,
) -> tuple[list[str], list]:
    """Build WHERE conditions and params for candidate permission queries."""
    conditions = ["s.subject_id = ANY(%s)"]
    params: list = [list(subject_ids)]
    if resource_type_id is not None:
        conditions.append("rt.id = %s")
        params.append(resource_type_id)
    if resource_id is not None:
        conditions.append("r.id = %s")
        params.append(resource_id)
    return conditions, params


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def candidates_for_subjects(
        self,
        subject_ids: Sequence[str],
        *,
        resource_type_id: UUID | None = None,
        resource_id: UUID | None = None,
    ) -> list[PermissionCandidate]:
        """Every permission held by any of the subjects, with level precedence."""
        conditions, params = _build_candidate_conditions(
            subject_ids, resource_type_id, resource_id
        )
        cur = await self._conn.execute(
            f"{_SELECT_PERMISSION} WHERE {' AND '.join(conditions)}",
            params,
        )
        rows = await cur.fetchall()
        return [
            PermissionCandidate(permission=_row_to_permission(r), precedence=r[8])
            for r in rows
        ]

    async def list_all(self) -> list[Permission]:
        """List every permission."""
        cur = await self._conn.execute(
            f"{_SELECT_PERMISSION} ORDER BY s.subject_id, r.name, pl.precedence"
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def list_for_resource(
        self, resource_type_name: str, resource_name: str
    ) -> list[Permission]:
        """List every permission on one resource."""
        cur = await self._conn.execute(
            f"{_SELECT_PERMISSION} "
            r"WHERE lower(trim(regexp_replace(rt.name, '\s+', ' ', 'g'))) = %s "
            "AND r.name = %s ORDER BY s.subject_id",
            (normalize_resource_type_name(resource_type_name), resource_name),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"{_SELECT_PERMISSION} WHERE p.id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get(self, subject_id: UUID, resource_id: UUID) -> Permission | None:
        """Get a subject's permission on a resource."""
        cur = await self._conn.execute(
            f"{_SELECT_PERMISSION} WHERE p.subject_id = %s AND p.resource_id = %s",
            (subject_id, resource_id),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def upsert(
        self, subject_id: UUID, resource_id: UUID, permission_level_id: UUID
    ) -> Permission | None:
        """Insert the permission, or change its level if the pair already has one."""
        cur = await self._conn.execute(
            "INSERT INTO permissions (id, subject_id, resource_id, permission_level_id) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (subject_id, resource_id) DO UPDATE "
            "SET permission_level_id = EXCLUDED.permission_level_id "
            "RETURNING id",
            (uuid4(), subject_id, resource_id, permission_level_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return await self.get_by_id(r[0])

    async def copy(self, source_subject_id: UUID, dest_subject_id: UUID) -> None:
        """Copy the source's permissions to the destination, keeping the stronger level."""
        await self._conn.execute(
            "INSERT INTO permissions AS d (id, subject_id, resource_id, permission_level_id) "
            "SELECT gen_random_uuid(), %s, resource_id, permission_level_id "
            "FROM permissions WHERE subject_id = %s "
            "ON CONFLICT (subject_id, resource_id) DO UPDATE SET permission_level_id = ("
            "SELECT id FROM permission_levels "
            "WHERE id IN (d.permission_level_id, EXCLUDED.permission_level_id) "
            "ORDER BY precedence LIMIT 1)",
            (dest_subject_id, source_subject_id),
        )

    async def delete(self, permission_id: UUID) -> int:
        """Delete permission. Returns rows deleted."""
        cur = await self._conn.execute(
            "DELETE FROM permissions WHERE id = %s",
            (permission_id,),
        )
        return cur.rowcount
