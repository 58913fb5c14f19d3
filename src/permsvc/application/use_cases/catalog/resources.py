"""Resource catalog use cases."""

from uuid import UUID

from permsvc.domain.entities import Resource
from permsvc.domain.exceptions import ClientError, Conflict, InvariantViolation, NotFound
from permsvc.domain.value_objects import ResourceRef


class ResourceCatalog:
    """Create, rename and remove resources. Deleting a resource drops its grants."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def list(
        self,
        resource_type_name: str | None = None,
        resource_name: str | None = None,
    ) -> list[Resource]:
        async with self._uow_factory() as uow:
            return await uow.resources.list(
                resource_type_name=resource_type_name,
                resource_name=resource_name,
            )

    async def add(self, ref: ResourceRef) -> Resource:
        async with self._uow_factory() as uow:
            resource_type = await uow.resource_types.get_by_name(ref.resource_type)
            if resource_type is None:
                raise ClientError(f"no resource type named {ref.resource_type}")
            if await uow.resources.get_by_name(ref.name, resource_type.id) is not None:
                raise Conflict(
                    f"a resource of type {ref.resource_type} named {ref.name} already exists"
                )
            return await uow.resources.add(ref.name, resource_type.id)

    async def update(self, id: UUID, name: str) -> Resource:
        async with self._uow_factory() as uow:
            if await uow.resources.get_by_id(id) is None:
                raise NotFound("resource", str(id))
            if await uow.resources.get_duplicate(id, name) is not None:
                raise Conflict(f"a resource of the same type named {name} already exists")
            resource = await uow.resources.update(id, name)
            if resource is None:
                raise InvariantViolation(f"resource disappeared during update: {id}")
        return resource

    async def delete(self, id: UUID) -> None:
        async with self._uow_factory() as uow:
            if await uow.resources.get_by_id(id) is None:
                raise NotFound("resource", str(id))
            count = await uow.resources.delete(id)
            if count != 1:
                raise InvariantViolation(f"{count} resources deleted for id {id}")

    async def delete_by_name(self, ref: ResourceRef) -> None:
        async with self._uow_factory() as uow:
            resource_type = await uow.resource_types.get_by_name(ref.resource_type)
            if resource_type is None:
                raise NotFound("resource type", ref.resource_type)
            resource = await uow.resources.get_by_name(ref.name, resource_type.id)
            if resource is None:
                raise NotFound("resource", f"{ref.resource_type}/{ref.name}")
            count = await uow.resources.delete(resource.id)
            if count != 1:
                raise InvariantViolation(f"{count} resources deleted for id {resource.id}")
