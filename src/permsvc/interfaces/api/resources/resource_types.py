"""Resource type catalog API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from permsvc.application.use_cases.catalog.resource_types import ResourceTypeCatalog
from permsvc.domain.exceptions import ClientError
from permsvc.interfaces.api.requests import optional_str, read_object, required_str
from permsvc.interfaces.api.serializers import resource_type_to_dict


class ResourceTypesResource:
    """GET/POST/DELETE /v1/resource_types."""

    def __init__(self, catalog: ResourceTypeCatalog) -> None:
        self._catalog = catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List resource types, optionally filtered by name."""
        resource_types = await self._catalog.list(req.get_param("resource_type_name"))
        resp.media = {"resource_types": [resource_type_to_dict(rt) for rt in resource_types]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await read_object(req)
        resource_type = await self._catalog.add(
            required_str(body, "name"), optional_str(body, "description")
        )
        resp.media = resource_type_to_dict(resource_type)
        resp.status = falcon.HTTP_201

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Delete a resource type by name."""
        name = req.get_param("resource_type_name")
        if not name:
            raise ClientError("missing required parameter: resource_type_name")
        await self._catalog.delete_by_name(name)
        resp.status = falcon.HTTP_200
        resp.media = {}


class ResourceTypeResource:
    """PUT/DELETE /v1/resource_types/{resource_type_id}."""

    def __init__(self, catalog: ResourceTypeCatalog) -> None:
        self._catalog = catalog

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_type_id: UUID,
    ) -> None:
        body = await read_object(req)
        resource_type = await self._catalog.update(
            resource_type_id, required_str(body, "name"), optional_str(body, "description")
        )
        resp.media = resource_type_to_dict(resource_type)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_type_id: UUID,
    ) -> None:
        await self._catalog.delete(resource_type_id)
        resp.status = falcon.HTTP_200
        resp.media = {}
