"""Revoke permission use case."""

from permsvc.application.services import PermissionMutationEngine
from permsvc.domain.value_objects import ResourceRef, SubjectRef


class RevokePermissionUseCase:
    """Remove a subject's permission on a resource."""

    def __init__(
        self,
        unit_of_work_factory: type,
        mutation_engine: PermissionMutationEngine,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._engine = mutation_engine

    async def execute(self, subject: SubjectRef, resource: ResourceRef) -> None:
        """Revoke the grant. Raises NotFound if any part of it does not exist."""
        async with self._uow_factory() as uow:
            await self._engine.revoke(uow, subject, resource)
