"""Привязка SCIM endpoint к HTTP маршрутам FastAPI"""

from fastapi import APIRouter, Query, Response
from fastapi.responses import StreamingResponse
from typing import List, Optional, Type
import logging

from ..models.scim import PatchRequest, ScimResource, SearchRequest
from .endpoint import AbstractResourceEndpoint
from .responses import SCIM_MEDIA_TYPE, ScimJSONResponse
from .streaming import ListResponseStream, dump_resource, iter_list_response

logger = logging.getLogger(__name__)


def _stream_response(stream: ListResponseStream) -> StreamingResponse:
    return StreamingResponse(iter_list_response(stream), media_type=SCIM_MEDIA_TYPE)


def _resource_response(resource: ScimResource, status_code: int = 200) -> ScimJSONResponse:
    headers = {}
    if resource.meta is not None and resource.meta.location:
        headers["Location"] = resource.meta.location
    return ScimJSONResponse(
        status_code=status_code,
        content=dump_resource(resource),
        headers=headers or None
    )


def build_resource_router(
    endpoint: AbstractResourceEndpoint,
    resource_model: Type[ScimResource],
    prefix: str,
    tags: Optional[List[str]] = None,
) -> APIRouter:
    """Создает роутер с маршрутами list/search/create/get/put/patch/delete"""

    router = APIRouter(prefix=prefix, tags=tags or [prefix.strip("/").lower()])

    @router.get("")
    async def list_resources(
        filter: Optional[str] = Query(None, description="SCIM filter expression"),
        attributes: Optional[str] = Query(None, description="Comma-separated list of attributes to return"),
        excluded_attributes: Optional[str] = Query(None, alias="excludedAttributes", description="Comma-separated list of attributes to exclude"),
        sort_by: Optional[str] = Query(None, alias="sortBy", description="Attribute to sort by"),
        sort_order: Optional[str] = Query(None, alias="sortOrder", description="Sort order: ascending or descending"),
        start_index: Optional[int] = Query(None, alias="startIndex", description="1-based index of the first result"),
        count: Optional[int] = Query(None, description="Number of results per page")
    ) -> StreamingResponse:
        """Поиск ресурсов через GET"""
        logger.debug(
            f"{prefix} list: filter={filter}, sortBy={sort_by}, sortOrder={sort_order}, "
            f"startIndex={start_index}, count={count}"
        )
        stream = await endpoint.list_via_get(
            attributes=attributes,
            excluded_attributes=excluded_attributes,
            filter_string=filter,
            sort_by=sort_by,
            sort_order=sort_order,
            page_start_index=start_index,
            page_size=count,
        )
        return _stream_response(stream)

    @router.post("/.search")
    async def search_resources(search_request: SearchRequest) -> StreamingResponse:
        """Поиск ресурсов через POST /.search"""
        logger.debug(f"{prefix} search: {search_request.model_dump(exclude_none=True)}")
        stream = await endpoint.search(search_request)
        return _stream_response(stream)

    @router.post("", status_code=201)
    async def create_resource(resource: resource_model) -> ScimJSONResponse:  # type: ignore[valid-type]
        """Создание ресурса"""
        logger.debug(f"{prefix} create")
        created = await endpoint.create(resource)
        return _resource_response(created, status_code=201)

    @router.get("/{resource_id}")
    async def get_resource(resource_id: str) -> ScimJSONResponse:
        """Получение ресурса по ID"""
        logger.debug(f"{prefix} get: {resource_id}")
        resource = await endpoint.retrieve(resource_id)
        return _resource_response(resource)

    @router.put("/{resource_id}")
    async def replace_resource(resource_id: str, resource: resource_model) -> ScimJSONResponse:  # type: ignore[valid-type]
        """Полное обновление ресурса"""
        logger.debug(f"{prefix} replace: {resource_id}")
        updated = await endpoint.replace(resource_id, resource)
        return _resource_response(updated)

    @router.patch("/{resource_id}")
    async def patch_resource(resource_id: str, patch_request: PatchRequest) -> ScimJSONResponse:
        """Частичное обновление ресурса через PATCH операции"""
        logger.debug(f"{prefix} patch: {resource_id}, {len(patch_request.Operations)} operations")
        updated = await endpoint.modify(resource_id, patch_request)
        return _resource_response(updated)

    @router.delete("/{resource_id}", status_code=204)
    async def delete_resource(resource_id: str) -> Response:
        """Удаление ресурса"""
        logger.debug(f"{prefix} delete: {resource_id}")
        await endpoint.delete(resource_id)
        return Response(status_code=204)

    return router
