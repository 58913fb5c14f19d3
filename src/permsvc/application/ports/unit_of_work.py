"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from permsvc.application.ports.repositories import (
    PermissionLevelRepository,
    PermissionRepository,
    ResourceRepository,
    ResourceTypeRepository,
    SubjectRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def permission_levels(self) -> PermissionLevelRepository: ...

    @property
    def subjects(self) -> SubjectRepository: ...

    @property
    def resource_types(self) -> ResourceTypeRepository: ...

    @property
    def resources(self) -> ResourceRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances.

    Each call yields a unit of work that commits when the block exits normally
    and rolls back when it raises.
    """

    def __call__(self) -> AsyncIterator[UnitOfWork]: ...
