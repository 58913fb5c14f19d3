"""Subject types."""

from enum import StrEnum

from permsvc.domain.exceptions import ClientError


class SubjectType(StrEnum):
    """Kinds of authorizable identities."""

    USER = "user"
    GROUP = "group"

    @classmethod
    def parse(cls, value: str) -> "SubjectType":
        """Parse a subject type, rejecting unknown values as a client error."""
        try:
            return cls(value)
        except ValueError:
            raise ClientError(f"invalid subject type: {value}") from None
