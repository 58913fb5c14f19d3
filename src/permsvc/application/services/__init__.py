"""Permission resolution and mutation engine."""

from permsvc.application.services.identity_resolver import SubjectIdentityResolver
from permsvc.application.services.level_registry import (
    PermissionLevelRegistry,
    PrecedenceFloor,
)
from permsvc.application.services.mutation_engine import PermissionMutationEngine
from permsvc.application.services.query_engine import (
    PermissionQueryEngine,
    collapse_effective,
)
from permsvc.application.services.source_enricher import SourceIdEnricher

__all__ = [
    "PermissionLevelRegistry",
    "PermissionMutationEngine",
    "PermissionQueryEngine",
    "PrecedenceFloor",
    "SourceIdEnricher",
    "SubjectIdentityResolver",
    "collapse_effective",
]
