"""Request body helpers.

Malformed bodies are the caller's fault and surface as ClientError.
"""

import falcon.asgi

from permsvc.domain.exceptions import ClientError
from permsvc.domain.value_objects import ResourceRef, SubjectRef, SubjectType

ENRICHMENT_WARNING = '199 permsvc "group directory unavailable; subject sources omitted"'


async def read_object(req: falcon.asgi.Request) -> dict:
    body = await req.get_media()
    if not isinstance(body, dict):
        raise ClientError("request body must be a JSON object")
    return body


def required_str(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ClientError(f"missing required field: {field}")
    return value


def optional_str(data: dict, field: str) -> str | None:
    value = data.get(field)
    if value is not None and not isinstance(value, str):
        raise ClientError(f"field must be a string: {field}")
    return value


def subject_ref_from(data: object) -> SubjectRef:
    if not isinstance(data, dict):
        raise ClientError("subject must be an object")
    return SubjectRef(
        subject_id=required_str(data, "subject_id"),
        subject_type=SubjectType.parse(required_str(data, "subject_type")),
    )


def resource_ref_from(data: object) -> ResourceRef:
    if not isinstance(data, dict):
        raise ClientError("resource must be an object")
    return ResourceRef(
        name=required_str(data, "name"),
        resource_type=required_str(data, "resource_type"),
    )
