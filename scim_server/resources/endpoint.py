"""Абстрактный SCIM endpoint для одного типа ресурсов

Обязательные операции (search, retrieve) объявлены абстрактными.
Изменяющие операции (create, replace, modify, delete) по умолчанию
завершаются ошибкой 501 Not Implemented, так что конкретный сервер
переопределяет только то, что реально поддерживает.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from ..models.scim import PatchRequest, ScimResource, SearchRequest, SortOrder
from ..utils.exceptions import InvalidRequestError, NotImplementedOperationError
from .streaming import ListResponseStream

T = TypeVar("T", bound=ScimResource)


def split_attribute_list(value: Optional[str]) -> Optional[List[str]]:
    """Разбивает список атрибутов, перечисленных через запятую

    Пустые сегменты в конце отбрасываются ("a,b," -> ["a", "b"]),
    пустая строка дает [""].
    """
    if value is None:
        return None
    parts = value.split(",")
    if value:
        while parts and parts[-1] == "":
            parts.pop()
    return parts


def parse_sort_order(value: Optional[str]) -> Optional[SortOrder]:
    """Преобразует параметр sortOrder в SortOrder (с учетом регистра)"""
    if value is None:
        return None
    try:
        return SortOrder(value)
    except ValueError:
        allowed = ", ".join(member.value for member in SortOrder)
        raise InvalidRequestError(f"Invalid sortOrder '{value}', expected one of: {allowed}") from None


class AbstractResourceEndpoint(ABC, Generic[T]):
    """Endpoint, обслуживающий запросы к одному типу SCIM ресурсов"""

    async def list_via_get(
        self,
        attributes: Optional[str] = None,
        excluded_attributes: Optional[str] = None,
        filter_string: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page_start_index: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> ListResponseStream[T]:
        """Поиск через GET: параметры строки запроса собираются в SearchRequest

        Значения переносятся без изменений и без значений по умолчанию,
        после чего запрос выполняется тем же путем, что и POST /.search.

        :raises InvalidRequestError: sortOrder не является допустимым значением
        """
        search_request = SearchRequest(
            attributes=split_attribute_list(attributes),
            excludedAttributes=split_attribute_list(excluded_attributes),
            filter=filter_string,
            sortBy=sort_by,
            sortOrder=parse_sort_order(sort_order),
            startIndex=page_start_index,
            count=page_size,
        )
        return await self.search(search_request)

    @abstractmethod
    async def search(self, search_request: SearchRequest) -> ListResponseStream[T]:
        """Поиск через POST /.search"""

    @abstractmethod
    async def retrieve(self, resource_id: str) -> T:
        """Получение ресурса по ID"""

    async def create(self, resource: T) -> T:
        """Создание ресурса. По умолчанию не поддерживается."""
        raise NotImplementedOperationError("POST not supported")

    async def replace(self, resource_id: str, resource: T) -> T:
        """Полная замена ресурса (PUT). По умолчанию не поддерживается."""
        raise NotImplementedOperationError("PUT not supported")

    async def modify(self, resource_id: str, patch_request: PatchRequest) -> T:
        """Частичное изменение ресурса (PATCH). По умолчанию не поддерживается."""
        raise NotImplementedOperationError("PATCH not supported")

    async def delete(self, resource_id: str) -> None:
        """Удаление ресурса. По умолчанию не поддерживается."""
        raise NotImplementedOperationError("DELETE not supported")
