"""Subject catalog API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from permsvc.application.use_cases.catalog.subjects import SubjectCatalog
from permsvc.domain.exceptions import ClientError
from permsvc.domain.value_objects import SubjectType
from permsvc.interfaces.api.requests import read_object, subject_ref_from
from permsvc.interfaces.api.serializers import subject_to_dict


def _subject_type_param(req: falcon.asgi.Request) -> SubjectType | None:
    value = req.get_param("subject_type")
    return SubjectType.parse(value) if value else None


class SubjectsResource:
    """GET/POST/DELETE /v1/subjects."""

    def __init__(self, catalog: SubjectCatalog) -> None:
        self._catalog = catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List subjects, optionally filtered by type and external id."""
        subjects = await self._catalog.list(
            subject_type=_subject_type_param(req),
            subject_id=req.get_param("subject_id"),
        )
        resp.media = {"subjects": [subject_to_dict(s) for s in subjects]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await read_object(req)
        subject = await self._catalog.add(subject_ref_from(body))
        resp.media = subject_to_dict(subject)
        resp.status = falcon.HTTP_201

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Delete a subject by external id, optionally qualified by type."""
        subject_id = req.get_param("subject_id")
        if not subject_id:
            raise ClientError("missing required parameter: subject_id")
        await self._catalog.delete_by_external_id(subject_id, _subject_type_param(req))
        resp.status = falcon.HTTP_200
        resp.media = {}


class SubjectResource:
    """PUT/DELETE /v1/subjects/{subject_uuid}."""

    def __init__(self, catalog: SubjectCatalog) -> None:
        self._catalog = catalog

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_uuid: UUID,
    ) -> None:
        body = await read_object(req)
        subject = await self._catalog.update(subject_uuid, subject_ref_from(body))
        resp.media = subject_to_dict(subject)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        subject_uuid: UUID,
    ) -> None:
        await self._catalog.delete(subject_uuid)
        resp.status = falcon.HTTP_200
        resp.media = {}
