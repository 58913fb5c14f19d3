"""Resource type catalog use cases."""

from uuid import UUID

import structlog

from permsvc.application.ports import UnitOfWork
from permsvc.domain.entities import ResourceType
from permsvc.domain.exceptions import ClientError, Conflict, InvariantViolation, NotFound

logger = structlog.get_logger(__name__)


class ResourceTypeCatalog:
    """Create, rename and remove resource types."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def list(self, name: str | None = None) -> list[ResourceType]:
        async with self._uow_factory() as uow:
            return await uow.resource_types.list(name=name)

    async def add(self, name: str, description: str | None = None) -> ResourceType:
        """Add a resource type. Names are compared after normalization."""
        async with self._uow_factory() as uow:
            if await uow.resource_types.get_by_name(name) is not None:
                raise Conflict(f"a resource type named {name} already exists")
            resource_type = await uow.resource_types.add(name, description)
        logger.info("resource_type_added", name=name)
        return resource_type

    async def update(
        self, id: UUID, name: str, description: str | None = None
    ) -> ResourceType:
        async with self._uow_factory() as uow:
            if await uow.resource_types.get_by_id(id) is None:
                raise NotFound("resource type", str(id))
            if await uow.resource_types.get_duplicate(id, name) is not None:
                raise Conflict(f"a resource type named {name} already exists")
            resource_type = await uow.resource_types.update(id, name, description)
            if resource_type is None:
                raise InvariantViolation(f"resource type disappeared during update: {id}")
        return resource_type

    async def delete(self, id: UUID) -> None:
        async with self._uow_factory() as uow:
            resource_type = await uow.resource_types.get_by_id(id)
            if resource_type is None:
                raise NotFound("resource type", str(id))
            await self._delete(uow, resource_type)

    async def delete_by_name(self, name: str) -> None:
        async with self._uow_factory() as uow:
            resource_type = await uow.resource_types.get_by_name(name)
            if resource_type is None:
                raise NotFound("resource type", name)
            await self._delete(uow, resource_type)

    async def _delete(self, uow: UnitOfWork, resource_type: ResourceType) -> None:
        # Unlike permissions, resources never cascade away with their type.
        if await uow.resources.count_of_type(resource_type.id) > 0:
            raise ClientError(
                f"resource type {resource_type.name} has resources associated with it"
            )
        count = await uow.resource_types.delete(resource_type.id)
        if count != 1:
            raise InvariantViolation(
                f"{count} resource types deleted for id {resource_type.id}"
            )
        logger.info("resource_type_deleted", name=resource_type.name)
