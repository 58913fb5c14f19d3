"""PostgreSQL resource type repository implementation."""

from uuid import UUID, uuid4

from psycopg import AsyncConnection

from permsvc.domain.entities import ResourceType
from permsvc.domain.value_objects import normalize_resource_type_name

# Same normalization as normalize_resource_type_name, applied to the stored column.
_NORMALIZED_NAME = r"lower(trim(regexp_replace(name, '\s+', ' ', 'g')))"


class PostgresResourceTypeRepository:
    """Resource type repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, id: UUID) -> ResourceType | None:
        """Get resource type by id."""
        cur = await self._conn.execute(
            "SELECT id, name, description FROM resource_types WHERE id = %s",
            (id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return ResourceType(id=r[0], name=r[1], description=r[2])

    async def get_by_name(self, name: str) -> ResourceType | None:
        """Get resource type by normalized name."""
        cur = await self._conn.execute(
            f"SELECT id, name, description FROM resource_types WHERE {_NORMALIZED_NAME} = %s",
            (normalize_resource_type_name(name),),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return ResourceType(id=r[0], name=r[1], description=r[2])

    async def get_duplicate(self, id: UUID, name: str) -> ResourceType | None:
        """Get another resource type whose normalized name matches."""
        cur = await self._conn.execute(
            "SELECT id, name, description FROM resource_types "
            f"WHERE id != %s AND {_NORMALIZED_NAME} = %s",
            (id, normalize_resource_type_name(name)),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return ResourceType(id=r[0], name=r[1], description=r[2])

    async def add(self, name: str, description: str | None) -> ResourceType:
        """Insert resource type."""
        cur = await self._conn.execute(
            "INSERT INTO resource_types (id, name, description) VALUES (%s, %s, %s) "
            "RETURNING id, name, description",
            (uuid4(), name, description),
        )
        r = await cur.fetchone()
        return ResourceType(id=r[0], name=r[1], description=r[2])

    async def update(
        self, id: UUID, name: str, description: str | None
    ) -> ResourceType | None:
        """Update resource type name and description."""
        cur = await self._conn.execute(
            "UPDATE resource_types SET name = %s, description = %s WHERE id = %s "
            "RETURNING id, name, description",
            (name, description, id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return ResourceType(id=r[0], name=r[1], description=r[2])

    async def delete(self, id: UUID) -> int:
        """Delete resource type. Returns rows deleted."""
        cur = await self._conn.execute("DELETE FROM resource_types WHERE id = %s", (id,))
        return cur.rowcount

    async def list(self, *, name: str | None = None) -> list[ResourceType]:
        """List resource types, optionally only the one with a matching name."""
        if name is None:
            cur = await self._conn.execute(
                "SELECT id, name, description FROM resource_types ORDER BY name"
            )
        else:
            cur = await self._conn.execute(
                f"SELECT id, name, description FROM resource_types WHERE {_NORMALIZED_NAME} = %s",
                (normalize_resource_type_name(name),),
            )
        rows = await cur.fetchall()
        return [ResourceType(id=r[0], name=r[1], description=r[2]) for r in rows]
