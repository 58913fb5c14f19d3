"""Resource type name normalization."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalize_resource_type_name(name: str) -> str:
    """Collapse runs of whitespace, trim and lowercase a resource type name.

    Two resource type names are the same name when their normalized forms match.
    """
    return _WHITESPACE.sub(" ", name).strip().lower()
