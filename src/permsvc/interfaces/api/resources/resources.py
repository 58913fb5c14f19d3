"""Resource catalog API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from permsvc.application.use_cases.catalog.resources import ResourceCatalog
from permsvc.domain.exceptions import ClientError
from permsvc.domain.value_objects import ResourceRef
from permsvc.interfaces.api.requests import read_object, required_str, resource_ref_from
from permsvc.interfaces.api.serializers import resource_to_dict


class ResourcesResource:
    """GET/POST/DELETE /v1/resources."""

    def __init__(self, catalog: ResourceCatalog) -> None:
        self._catalog = catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List resources, optionally filtered by type and name."""
        resources = await self._catalog.list(
            resource_type_name=req.get_param("resource_type_name"),
            resource_name=req.get_param("resource_name"),
        )
        resp.media = {"resources": [resource_to_dict(r) for r in resources]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await read_object(req)
        resource = await self._catalog.add(resource_ref_from(body))
        resp.media = resource_to_dict(resource)
        resp.status = falcon.HTTP_201

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Delete a resource by type and name."""
        resource_type = req.get_param("resource_type_name")
        name = req.get_param("resource_name")
        if not resource_type or not name:
            raise ClientError(
                "missing required parameters: resource_type_name, resource_name"
            )
        await self._catalog.delete_by_name(ResourceRef(name, resource_type))
        resp.status = falcon.HTTP_200
        resp.media = {}


class ResourceResource:
    """PUT/DELETE /v1/resources/{resource_id}."""

    def __init__(self, catalog: ResourceCatalog) -> None:
        self._catalog = catalog

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: UUID,
    ) -> None:
        """Rename a resource."""
        body = await read_object(req)
        resource = await self._catalog.update(resource_id, required_str(body, "name"))
        resp.media = resource_to_dict(resource)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        resource_id: UUID,
    ) -> None:
        await self._catalog.delete(resource_id)
        resp.status = falcon.HTTP_200
        resp.media = {}
