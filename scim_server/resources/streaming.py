"""Потоковая выдача SCIM ListResponse"""

import json
from typing import Any, AsyncIterable, AsyncIterator, Dict, Generic, Iterable, Optional, TypeVar, Union

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from ..models.scim import SCIMSchema

T = TypeVar("T")


def dump_resource(resource: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Преобразует ресурс в JSON-совместимый словарь"""
    if isinstance(resource, BaseModel):
        return resource.model_dump(mode="json", by_alias=True, exclude_none=True)
    return jsonable_encoder(resource)


class ListResponseStream(Generic[T]):
    """Ленивый источник результатов поиска с метаданными списка

    Ресурсы не материализуются целиком: транспортный слой сам вытягивает
    их по одному через ``async for``.
    """

    def __init__(
        self,
        resources: Union[Iterable[T], AsyncIterable[T]],
        total_results: int,
        start_index: Optional[int] = None,
        items_per_page: Optional[int] = None,
    ):
        self.resources = resources
        self.total_results = total_results
        self.start_index = start_index
        self.items_per_page = items_per_page

    async def __aiter__(self) -> AsyncIterator[T]:
        if hasattr(self.resources, "__aiter__"):
            async for resource in self.resources:  # type: ignore[union-attr]
                yield resource
        else:
            for resource in self.resources:  # type: ignore[union-attr]
                yield resource


async def iter_list_response(stream: ListResponseStream) -> AsyncIterator[bytes]:
    """Пишет ListResponse по частям: заголовок, ресурсы по одному, закрывающая скобка"""
    header: Dict[str, Any] = {
        "schemas": [SCIMSchema.LIST_RESPONSE.value],
        "totalResults": stream.total_results,
    }
    if stream.start_index is not None:
        header["startIndex"] = stream.start_index
    if stream.items_per_page is not None:
        header["itemsPerPage"] = stream.items_per_page

    yield (json.dumps(header)[:-1] + ', "Resources": [').encode("utf-8")

    separator = ""
    async for resource in stream:
        yield (separator + json.dumps(dump_resource(resource))).encode("utf-8")
        separator = ", "

    yield b"]}"
