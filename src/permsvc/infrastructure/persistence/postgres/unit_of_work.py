"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from permsvc.domain.exceptions import Conflict, StorageUnavailable
from permsvc.infrastructure.persistence.postgres.permission_level_repository import (
    PostgresPermissionLevelRepository,
)
from permsvc.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from permsvc.infrastructure.persistence.postgres.resource_repository import (
    PostgresResourceRepository,
)
from permsvc.infrastructure.persistence.postgres.resource_type_repository import (
    PostgresResourceTypeRepository,
)
from permsvc.infrastructure.persistence.postgres.subject_repository import (
    PostgresSubjectRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._permission_levels = PostgresPermissionLevelRepository(self._conn)
        self._subjects = PostgresSubjectRepository(self._conn)
        self._resource_types = PostgresResourceTypeRepository(self._conn)
        self._resources = PostgresResourceRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def permission_levels(self) -> PostgresPermissionLevelRepository:
        return self._permission_levels

    @property
    def subjects(self) -> PostgresSubjectRepository:
        return self._subjects

    @property
    def resource_types(self) -> PostgresResourceTypeRepository:
        return self._resource_types

    @property
    def resources(self) -> PostgresResourceRepository:
        return self._resources

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Unique-constraint races surface as Conflict; connection failures and pool
    timeouts surface as StorageUnavailable.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.errors.UniqueViolation as e:
            raise Conflict(str(e).strip()) from e
        except psycopg.OperationalError as e:
            raise StorageUnavailable(str(e).strip()) from e

    return factory
