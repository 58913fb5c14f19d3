"""Domain exceptions.

ClientError and NotFound are caused by the caller and are never retried.
ServerFault covers storage and directory failures plus broken invariants.
"""


class PermsvcError(Exception):
    """Base exception for the permissions service."""

    pass


class ClientError(PermsvcError):
    """Malformed or inconsistent input supplied by the caller."""

    pass


class Conflict(ClientError):
    """An entity with the same name or identifier already exists."""

    pass


class NotFound(PermsvcError):
    """Referenced entity does not exist."""

    def __init__(self, entity: str, key: str) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class UnknownPermissionLevel(ClientError, NotFound):
    """Permission level name is not in the catalog."""

    def __init__(self, name: str) -> None:
        NotFound.__init__(self, "permission level", name)


class ServerFault(PermsvcError):
    """Failure that is not the caller's fault."""

    pass


class InvariantViolation(ServerFault):
    """An operation expected to affect exactly one row did not."""

    pass


class StorageUnavailable(ServerFault):
    """The permissions database could not be reached."""

    pass


class DirectoryUnavailable(ServerFault):
    """The group directory could not be reached."""

    pass
