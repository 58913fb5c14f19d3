"""Grant permission use case."""

from dataclasses import dataclass

from permsvc.application.services import PermissionMutationEngine, SourceIdEnricher
from permsvc.domain.entities import Permission
from permsvc.domain.value_objects import ResourceRef, SubjectRef


@dataclass
class GrantResult:
    """Granted permission plus whether source enrichment succeeded."""

    permission: Permission
    enriched: bool


class GrantPermissionUseCase:
    """Grant (or change) a subject's permission level on a resource.

    Missing subjects and resources are created; the resource type must exist.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        mutation_engine: PermissionMutationEngine,
        enricher: SourceIdEnricher,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._engine = mutation_engine
        self._enricher = enricher

    async def execute(
        self,
        subject: SubjectRef,
        resource: ResourceRef,
        permission_level: str,
    ) -> GrantResult:
        async with self._uow_factory() as uow:
            permission = await self._engine.grant(uow, subject, resource, permission_level)

        # The grant is committed at this point; enrichment failures only warn.
        enriched = await self._enricher.enrich([permission])
        return GrantResult(permission=permission, enriched=enriched)
