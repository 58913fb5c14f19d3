"""Group directory implementations."""

from permsvc.infrastructure.directory.grouper_directory import GrouperDirectory
from permsvc.infrastructure.directory.keycloak_directory import KeycloakDirectory
from permsvc.infrastructure.directory.static_directory import StaticGroupDirectory

__all__ = ["GrouperDirectory", "KeycloakDirectory", "StaticGroupDirectory"]
