"""SCIM endpoint поверх upstream SCIM API"""

import httpx
from pydantic import ValidationError
from typing import Any, Dict, Optional, Type, TypeVar

from ..config import settings
from ..models.scim import ListResponse, PatchRequest, ScimResource, SearchRequest
from ..resources.endpoint import AbstractResourceEndpoint
from ..resources.responses import SCIM_MEDIA_TYPE
from ..resources.streaming import ListResponseStream, dump_resource
from ..utils.exceptions import (
    InvalidFilterError,
    InvalidRequestError,
    NotImplementedOperationError,
    PatchOperationError,
    ResourceConflictError,
    ResourceNotFoundError,
    SCIMServerError,
    UpstreamError,
)
from .attributes import project_attributes

T = TypeVar("T", bound=ScimResource)


def search_request_to_params(search_request: SearchRequest) -> Dict[str, Any]:
    """Кодирует SearchRequest в параметры строки запроса upstream API

    attributes/excludedAttributes не передаются: проекция выполняется локально.
    """
    params: Dict[str, Any] = {}

    if search_request.filter is not None:
        params["filter"] = search_request.filter
    if search_request.sortBy is not None:
        params["sortBy"] = search_request.sortBy
    if search_request.sortOrder is not None:
        params["sortOrder"] = search_request.sortOrder.value
    if search_request.startIndex is not None:
        params["startIndex"] = search_request.startIndex
    if search_request.count is not None:
        params["count"] = search_request.count

    return params


class UpstreamClient:
    """HTTP клиент для upstream SCIM API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        auth_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.auth_token = auth_token if auth_token is not None else settings.upstream_auth_token
        self.client = httpx.AsyncClient(
            base_url=base_url or str(settings.upstream_base_url),
            timeout=timeout or settings.upstream_timeout,
            limits=httpx.Limits(
                max_connections=settings.upstream_max_connections,
                max_keepalive_connections=20
            ),
            follow_redirects=True,
            transport=transport
        )

    async def close(self):
        """Закрытие HTTP клиента"""
        await self.client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """Выполняет запрос и преобразует ошибочные статусы в исключения"""
        try:
            response = await self.client.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._prepare_headers(content_type=SCIM_MEDIA_TYPE if json is not None else None)
            )
        except httpx.RequestError as e:
            raise UpstreamError(f"Request to upstream API failed: {str(e)}")

        if response.is_success:
            return response

        raise self._error_for(method, path, response)

    def _error_for(self, method: str, path: str, response: httpx.Response) -> SCIMServerError:
        """Сопоставляет статус upstream ответа с исключением"""
        detail = response.text
        scim_type = None
        try:
            body = response.json()
            if isinstance(body, dict):
                detail = body.get("detail") or detail
                scim_type = body.get("scimType")
        except ValueError:
            pass

        status = response.status_code
        if status == 404:
            return ResourceNotFoundError(path.rsplit("/", 1)[-1], message=detail or None)
        if status == 409:
            return ResourceConflictError(detail)
        if status == 400:
            if scim_type == "invalidFilter":
                return InvalidFilterError(detail)
            if method == "PATCH":
                return PatchOperationError(detail)
            return InvalidRequestError(detail, scim_type=scim_type or "invalidValue")
        if status == 501:
            return NotImplementedOperationError(detail)
        return UpstreamError(
            f"Upstream API returned {status}: {detail}",
            status_code=status if status >= 500 else 502
        )

    def _prepare_headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        """Подготавливает заголовки для upstream запроса"""
        headers = {
            "Accept": SCIM_MEDIA_TYPE,
            "User-Agent": "SCIM-Resource-Server/1.0.0",
        }

        if content_type:
            headers["Content-Type"] = content_type

        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"

        return headers


class UpstreamResourceEndpoint(AbstractResourceEndpoint[T]):
    """Endpoint только на чтение: поиск и получение ресурса из upstream API"""

    def __init__(self, client: UpstreamClient, resource_model: Type[T], path: str):
        self.client = client
        self.resource_model = resource_model
        self.path = path

    def _parse(self, data: Any) -> T:
        try:
            return self.resource_model.model_validate(data)
        except ValidationError as e:
            raise UpstreamError(f"Failed to parse upstream response: {str(e)}")

    async def search(self, search_request: SearchRequest) -> ListResponseStream[T]:
        response = await self.client.request(
            "GET",
            self.path,
            params=search_request_to_params(search_request)
        )

        try:
            page = ListResponse.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise UpstreamError(f"Failed to parse upstream response: {str(e)}")

        resources = [self._parse(item) for item in page.Resources]

        return ListResponseStream(
            (
                project_attributes(resource, search_request.attributes, search_request.excludedAttributes)
                for resource in resources
            ),
            total_results=page.totalResults,
            start_index=page.startIndex,
            items_per_page=page.itemsPerPage if page.itemsPerPage is not None else len(resources)
        )

    async def retrieve(self, resource_id: str) -> T:
        response = await self.client.request("GET", f"{self.path}/{resource_id}")
        return self._parse(response.json())


class WritableUpstreamResourceEndpoint(UpstreamResourceEndpoint[T]):
    """Endpoint с полным набором операций, проксируемых в upstream API"""

    async def create(self, resource: T) -> T:
        response = await self.client.request("POST", self.path, json=dump_resource(resource))
        return self._parse(response.json())

    async def replace(self, resource_id: str, resource: T) -> T:
        response = await self.client.request(
            "PUT",
            f"{self.path}/{resource_id}",
            json=dump_resource(resource)
        )
        return self._parse(response.json())

    async def modify(self, resource_id: str, patch_request: PatchRequest) -> T:
        response = await self.client.request(
            "PATCH",
            f"{self.path}/{resource_id}",
            json=patch_request.model_dump(mode="json", exclude_none=True)
        )
        # RFC 7644 разрешает 204 без тела
        if response.status_code == 204:
            return await self.retrieve(resource_id)
        return self._parse(response.json())

    async def delete(self, resource_id: str) -> None:
        await self.client.request("DELETE", f"{self.path}/{resource_id}")
