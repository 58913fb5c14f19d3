"""Adds identity-provider source ids to permissions after resolution."""

from collections.abc import Sequence

import structlog

from permsvc.application.ports import GroupDirectory
from permsvc.domain.entities import Permission
from permsvc.domain.exceptions import DirectoryUnavailable

logger = structlog.get_logger(__name__)


class SourceIdEnricher:
    """Best-effort annotation of permission subjects with their directory source.

    Runs after the resolving transaction has finished, so a directory outage
    never undoes or hides an authorization result.
    """

    def __init__(self, group_directory: GroupDirectory) -> None:
        self._directory = group_directory

    async def enrich(self, permissions: Sequence[Permission]) -> bool:
        """Annotate in place. Returns False if the directory could not be reached."""
        if not permissions:
            return True
        try:
            await self._directory.add_source_ids(permissions)
        except DirectoryUnavailable as e:
            logger.warning(
                "group_directory_enrichment_failed",
                error=str(e),
                permissions=len(permissions),
            )
            return False
        return True
