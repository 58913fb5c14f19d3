"""Copy permissions use case."""

from collections.abc import Sequence

from permsvc.application.services import PermissionMutationEngine
from permsvc.domain.entities import Subject
from permsvc.domain.value_objects import SubjectRef


class CopyPermissionsUseCase:
    """Copy one subject's grants onto other subjects in a single transaction."""

    def __init__(
        self,
        unit_of_work_factory: type,
        mutation_engine: PermissionMutationEngine,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._engine = mutation_engine

    async def execute(
        self, source: SubjectRef, destinations: Sequence[SubjectRef]
    ) -> list[Subject]:
        async with self._uow_factory() as uow:
            return await self._engine.copy_permissions(uow, source, destinations)
