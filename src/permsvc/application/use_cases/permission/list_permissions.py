"""Raw permission listings (no precedence collapse)."""

from permsvc.application.services import SourceIdEnricher
from permsvc.domain.entities import Permission


class ListPermissionsUseCase:
    """List every stored permission."""

    def __init__(self, unit_of_work_factory: type, enricher: SourceIdEnricher) -> None:
        self._uow_factory = unit_of_work_factory
        self._enricher = enricher

    async def execute(self) -> list[Permission]:
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()
        await self._enricher.enrich(permissions)
        return permissions


class ListResourcePermissionsUseCase:
    """List every permission granted on one resource."""

    def __init__(self, unit_of_work_factory: type, enricher: SourceIdEnricher) -> None:
        self._uow_factory = unit_of_work_factory
        self._enricher = enricher

    async def execute(self, resource_type_name: str, resource_name: str) -> list[Permission]:
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_for_resource(
                resource_type_name, resource_name
            )
        await self._enricher.enrich(permissions)
        return permissions
