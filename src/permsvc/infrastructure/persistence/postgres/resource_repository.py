"""PostgreSQL resource repository implementation."""

from uuid import UUID, uuid4

from psycopg import AsyncConnection

from permsvc.domain.entities import Resource
from permsvc.domain.value_objects import normalize_resource_type_name

_SELECT_RESOURCE = (
    "SELECT r.id, r.name, t.name AS resource_type "
    "FROM resources r JOIN resource_types t ON r.resource_type_id = t.id"
)


class PostgresResourceRepository:
    """Resource repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, id: UUID) -> Resource | None:
        """Get resource by id."""
        cur = await self._conn.execute(f"{_SELECT_RESOURCE} WHERE r.id = %s", (id,))
        r = await cur.fetchone()
        if not r:
            return None
        return Resource(id=r[0], name=r[1], resource_type=r[2])

    async def get_by_name(self, name: str, resource_type_id: UUID) -> Resource | None:
        """Get resource by name within a resource type."""
        cur = await self._conn.execute(
            f"{_SELECT_RESOURCE} WHERE t.id = %s AND r.name = %s",
            (resource_type_id, name),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Resource(id=r[0], name=r[1], resource_type=r[2])

    async def get_duplicate(self, id: UUID, name: str) -> Resource | None:
        """Get another resource of the same type with the given name."""
        cur = await self._conn.execute(
            f"{_SELECT_RESOURCE} WHERE r.id != %s AND r.name = %s "
            "AND r.resource_type_id = (SELECT resource_type_id FROM resources WHERE id = %s)",
            (id, name, id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Resource(id=r[0], name=r[1], resource_type=r[2])

    async def count_of_type(self, resource_type_id: UUID) -> int:
        """Count resources of a resource type."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM resources WHERE resource_type_id = %s",
            (resource_type_id,),
        )
        r = await cur.fetchone()
        return r[0]

    async def add(self, name: str, resource_type_id: UUID) -> Resource:
        """Insert resource."""
        cur = await self._conn.execute(
            "INSERT INTO resources (id, name, resource_type_id) VALUES (%s, %s, %s) "
            "RETURNING id, name, (SELECT name FROM resource_types t WHERE t.id = resource_type_id)",
            (uuid4(), name, resource_type_id),
        )
        r = await cur.fetchone()
        return Resource(id=r[0], name=r[1], resource_type=r[2])

    async def update(self, id: UUID, name: str) -> Resource | None:
        """Rename resource."""
        cur = await self._conn.execute(
            "UPDATE resources SET name = %s WHERE id = %s "
            "RETURNING id, name, (SELECT name FROM resource_types t WHERE t.id = resource_type_id)",
            (name, id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Resource(id=r[0], name=r[1], resource_type=r[2])

    async def delete(self, id: UUID) -> int:
        """Delete resource; its permissions cascade. Returns rows deleted."""
        cur = await self._conn.execute("DELETE FROM resources WHERE id = %s", (id,))
        return cur.rowcount

    async def list(
        self,
        *,
        resource_type_name: str | None = None,
        resource_name: str | None = None,
    ) -> list[Resource]:
        """List resources, optionally filtered by type name and resource name."""
        conditions: list[str] = []
        params: list[object] = []
        if resource_type_name is not None:
            conditions.append(r"lower(trim(regexp_replace(t.name, '\s+', ' ', 'g'))) = %s")
            params.append(normalize_resource_type_name(resource_type_name))
        if resource_name is not None:
            conditions.append("r.name = %s")
            params.append(resource_name)
        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
        cur = await self._conn.execute(
            f"{_SELECT_RESOURCE}{where} ORDER BY t.name, r.name",
            params,
        )
        rows = await cur.fetchall()
        return [Resource(id=r[0], name=r[1], resource_type=r[2]) for r in rows]
