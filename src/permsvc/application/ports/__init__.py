"""Application ports - interfaces for external adapters."""

from permsvc.application.ports.group_directory import GroupDirectory, GroupInfo
from permsvc.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "GroupDirectory",
    "GroupInfo",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
