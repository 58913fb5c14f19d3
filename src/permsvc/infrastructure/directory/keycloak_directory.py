"""Keycloak-backed group directory."""

import asyncio
from collections.abc import Sequence

from keycloak import KeycloakAdmin
from keycloak.exceptions import KeycloakError

from permsvc.application.ports import GroupInfo
from permsvc.domain.entities import Permission
from permsvc.domain.exceptions import DirectoryUnavailable

KEYCLOAK_SOURCE_ID = "keycloak"


class KeycloakDirectory:
    """Group memberships and user sources from the Keycloak admin API.

    Subject ids are Keycloak usernames. Users imported from a federation
    provider report the provider id as their source; local users report
    "keycloak". The admin client is blocking, so calls run in a worker thread.
    """

    def __init__(self, admin: KeycloakAdmin, group_name_prefix: str = "") -> None:
        self._admin = admin
        self._prefix = group_name_prefix

    @classmethod
    def from_settings(
        cls,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str,
        group_name_prefix: str = "",
    ) -> "KeycloakDirectory":
        admin = KeycloakAdmin(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        return cls(admin, group_name_prefix)

    def _find_user(self, username: str) -> dict | None:
        users = self._admin.get_users({"username": username, "exact": True})
        return users[0] if users else None

    def _groups_for_username(self, username: str) -> list[GroupInfo]:
        user = self._find_user(username)
        if user is None:
            return []
        groups = self._admin.get_user_groups(user["id"])
        return [
            GroupInfo(id=g["id"], name=g["name"])
            for g in groups
            if g.get("name", "").startswith(self._prefix)
        ]

    def _sources_for_usernames(self, usernames: Sequence[str]) -> dict[str, str]:
        sources = {}
        for username in usernames:
            user = self._find_user(username)
            if user is not None:
                sources[username] = user.get("federationLink") or KEYCLOAK_SOURCE_ID
        return sources

    async def groups_for_subject(self, subject_id: str) -> list[GroupInfo]:
        try:
            return await asyncio.to_thread(self._groups_for_username, subject_id)
        except KeycloakError as e:
            raise DirectoryUnavailable(f"keycloak group lookup failed: {e}") from e

    async def add_source_ids(self, permissions: Sequence[Permission]) -> None:
        usernames = sorted({p.subject.subject_id for p in permissions})
        try:
            sources = await asyncio.to_thread(self._sources_for_usernames, usernames)
        except KeycloakError as e:
            raise DirectoryUnavailable(f"keycloak source lookup failed: {e}") from e
        for p in permissions:
            source_id = sources.get(p.subject.subject_id)
            if source_id is not None:
                p.subject.source_id = source_id
