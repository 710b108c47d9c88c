"""Generic CRUD resource adapter.

One ``CrudResource`` instance exposes five endpoints for an entity schema and
delegates persistence to an injected ``EntityService``:

    POST   /<plural>        create (400 if the body already has an id)
    PUT    /<plural>        update (falls back to create when id is absent)
    GET    /<plural>        paginated list, paging metadata in headers only
    GET    /<plural>/{id}   single entity or 404
    DELETE /<plural>/{id}   delete without existence check

Endpoint signatures are built from the schema class at runtime, so this
module keeps annotations evaluated eagerly.
"""

from typing import Generic

import structlog
from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.responses import JSONResponse
from starlette.datastructures import URL

from src.elephant.api import headers
from src.elephant.api.pagination import generate_pagination_headers, get_pageable
from src.elephant.core.errors import ResourceUriError
from src.elephant.core.monitoring import track_rest_operation
from src.elephant.core.pagination import Pageable
from src.elephant.core.service import MAX_ENTITY_ID, EntityService, SchemaT

logger = structlog.get_logger(__name__)


class CrudResource(Generic[SchemaT]):
    """REST adapter mapping HTTP operations onto an entity service.

    Args:
        entity_name: Alert topic and singular resource name, e.g. "deal".
        schema: EntitySchema subclass used to deserialize request bodies.
        service: Persistence service for the entity.
        plural: URL segment; defaults to ``entity_name + "s"``.
        api_prefix: Mount point of the router, used for Location and Link URLs.
    """

    def __init__(
        self,
        entity_name: str,
        schema: type[SchemaT],
        service: EntityService[SchemaT],
        plural: str | None = None,
        api_prefix: str = "/api",
    ) -> None:
        self.entity_name = entity_name
        self.schema = schema
        self.service = service
        self.plural = plural or f"{entity_name}s"
        self.base_path = f"{api_prefix}/{self.plural}"
        self.router = APIRouter(prefix=f"/{self.plural}", tags=[self.plural])
        self._register_routes()

    # ── Operations ───────────────────────────────────────────────────────────

    async def create(self, body: SchemaT) -> Response:
        logger.debug("rest.create_request", entity=self.entity_name, payload=body.model_dump(mode="json"))
        if body.id is not None:
            return Response(
                status_code=status.HTTP_400_BAD_REQUEST,
                headers=headers.create_failure_alert(
                    self.entity_name,
                    "idexists",
                    f"A new {self.entity_name} cannot already have an ID",
                ),
            )
        async with track_rest_operation(self.entity_name, "create"):
            result = await self.service.save(body)
        location = self._location(result.id)
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=result.model_dump(mode="json"),
            headers={
                "Location": location,
                **headers.create_entity_creation_alert(self.entity_name, str(result.id)),
            },
        )

    async def update(self, body: SchemaT) -> Response:
        logger.debug("rest.update_request", entity=self.entity_name, payload=body.model_dump(mode="json"))
        if body.id is None:
            return await self.create(body)
        async with track_rest_operation(self.entity_name, "update"):
            result = await self.service.save(body)
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=result.model_dump(mode="json"),
            headers=headers.create_entity_update_alert(self.entity_name, str(body.id)),
        )

    async def get_all(self, pageable: Pageable) -> Response:
        logger.debug(
            "rest.list_request",
            entity=self.entity_name,
            page=pageable.page,
            size=pageable.size,
        )
        async with track_rest_operation(self.entity_name, "list"):
            page = await self.service.find_all(pageable)
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=[item.model_dump(mode="json") for item in page.content],
            headers=generate_pagination_headers(page, self.base_path),
        )

    async def get_one(self, entity_id: int) -> Response:
        logger.debug("rest.get_request", entity=self.entity_name, entity_id=entity_id)
        async with track_rest_operation(self.entity_name, "get"):
            result = await self.service.find_one(entity_id)
        if result is None:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return JSONResponse(status_code=status.HTTP_200_OK, content=result.model_dump(mode="json"))

    async def delete(self, entity_id: int) -> Response:
        logger.debug("rest.delete_request", entity=self.entity_name, entity_id=entity_id)
        async with track_rest_operation(self.entity_name, "delete"):
            await self.service.delete(entity_id)
        return Response(
            status_code=status.HTTP_200_OK,
            headers=headers.create_entity_deletion_alert(self.entity_name, str(entity_id)),
        )

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _location(self, entity_id: int | None) -> str:
        if entity_id is None:
            raise ResourceUriError(f"Saved {self.entity_name} has no id to build a Location from")
        return str(URL(f"{self.base_path}/{entity_id}"))

    def _register_routes(self) -> None:
        schema = self.schema
        name = self.entity_name

        async def create_entity(body: schema) -> Response:
            return await self.create(body)

        async def update_entity(body: schema) -> Response:
            return await self.update(body)

        async def list_entities(pageable: Pageable = Depends(get_pageable)) -> Response:
            return await self.get_all(pageable)

        async def get_entity(id: int = Path(ge=1, le=MAX_ENTITY_ID)) -> Response:
            return await self.get_one(id)

        async def delete_entity(id: int = Path(ge=1, le=MAX_ENTITY_ID)) -> Response:
            return await self.delete(id)

        self.router.add_api_route(
            "", create_entity, methods=["POST"], name=f"create_{name}",
            status_code=status.HTTP_201_CREATED, response_model=schema,
        )
        self.router.add_api_route(
            "", update_entity, methods=["PUT"], name=f"update_{name}", response_model=schema,
        )
        self.router.add_api_route(
            "", list_entities, methods=["GET"], name=f"list_{self.plural}", response_model=list[schema],
        )
        self.router.add_api_route(
            "/{id}", get_entity, methods=["GET"], name=f"get_{name}", response_model=schema,
        )
        self.router.add_api_route(
            "/{id}", delete_entity, methods=["DELETE"], name=f"delete_{name}",
        )
