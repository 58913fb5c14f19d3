"""PostgreSQL permission level repository implementation."""

from psycopg import AsyncConnection

from permsvc.domain.entities import PermissionLevel


class PostgresPermissionLevelRepository:
    """Permission level repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_name(self, name: str) -> PermissionLevel | None:
        """Get permission level by name."""
        cur = await self._conn.execute(
            "SELECT id, name, precedence FROM permission_levels WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return PermissionLevel(id=r[0], name=r[1], precedence=r[2])

    async def list_all(self) -> list[PermissionLevel]:
        """List all permission levels, most permissive first."""
        cur = await self._conn.execute(
            "SELECT id, name, precedence FROM permission_levels ORDER BY precedence"
        )
        rows = await cur.fetchall()
        return [PermissionLevel(id=r[0], name=r[1], precedence=r[2]) for r in rows]
