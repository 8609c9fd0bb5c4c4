"""SCIM модели данных согласно RFC 7643/7644"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


class SCIMSchema(str, Enum):
    """SCIM схемы"""
    USER = "urn:ietf:params:scim:schemas:core:2.0:User"
    GROUP = "urn:ietf:params:scim:schemas:core:2.0:Group"
    LIST_RESPONSE = "urn:ietf:params:scim:api:messages:2.0:ListResponse"
    SEARCH_REQUEST = "urn:ietf:params:scim:api:messages:2.0:SearchRequest"
    PATCH_OP = "urn:ietf:params:scim:api:messages:2.0:PatchOp"
    ERROR = "urn:ietf:params:scim:api:messages:2.0:Error"
    SERVICE_PROVIDER_CONFIG = "urn:ietf:params:scim:schemas:core:2.0:ServiceProviderConfig"
    RESOURCE_TYPE = "urn:ietf:params:scim:schemas:core:2.0:ResourceType"


class SortOrder(str, Enum):
    """Порядок сортировки результатов поиска"""
    ASCENDING = "ascending"
    DESCENDING = "descending"


class Email(BaseModel):
    """Email адрес пользователя"""
    value: str
    type: Optional[str] = None
    primary: Optional[bool] = None


class PhoneNumber(BaseModel):
    """Номер телефона пользователя"""
    value: str
    type: Optional[str] = None
    primary: Optional[bool] = None


class Name(BaseModel):
    """Имя пользователя"""
    formatted: Optional[str] = None
    familyName: Optional[str] = None
    givenName: Optional[str] = None
    middleName: Optional[str] = None
    honorificPrefix: Optional[str] = None
    honorificSuffix: Optional[str] = None


class Meta(BaseModel):
    """Метаданные ресурса"""
    resourceType: Optional[str] = None
    created: Optional[datetime] = None
    lastModified: Optional[datetime] = None
    location: Optional[str] = None
    version: Optional[str] = None


class ScimResource(BaseModel):
    """Базовый SCIM ресурс: общие атрибуты любого типа ресурсов"""
    id: Optional[str] = None
    externalId: Optional[str] = None
    meta: Optional[Meta] = None
    schemas: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "allow"  # Атрибуты расширений схем сохраняются как есть


class User(ScimResource):
    """Пользователь SCIM"""
    userName: Optional[str] = None
    displayName: Optional[str] = None
    active: Optional[bool] = None
    emails: Optional[List[Email]] = None
    phoneNumbers: Optional[List[PhoneNumber]] = None
    name: Optional[Name] = None
    title: Optional[str] = None
    schemas: List[str] = Field(default_factory=lambda: [SCIMSchema.USER.value])


class GroupMember(BaseModel):
    """Член группы SCIM"""
    value: str  # ID пользователя или группы
    ref: Optional[str] = Field(None, alias="$ref")  # URI ссылка на ресурс
    type: Optional[str] = None  # User или Group
    display: Optional[str] = None

    class Config:
        populate_by_name = True


class Group(ScimResource):
    """Группа SCIM"""
    displayName: Optional[str] = None
    members: Optional[List[GroupMember]] = None
    schemas: List[str] = Field(default_factory=lambda: [SCIMSchema.GROUP.value])


class SearchRequest(BaseModel):
    """Канонический запрос поиска (тело POST /.search)

    Все поля необязательны; отсутствующее значение остается None и
    интерпретируется нижележащей реализацией поиска.
    """
    schemas: List[str] = Field(default_factory=lambda: [SCIMSchema.SEARCH_REQUEST.value])
    attributes: Optional[List[str]] = None
    excludedAttributes: Optional[List[str]] = None
    filter: Optional[str] = None
    sortBy: Optional[str] = None
    sortOrder: Optional[SortOrder] = None
    startIndex: Optional[int] = None
    count: Optional[int] = None


class PatchOperation(BaseModel):
    """PATCH операция SCIM"""
    op: str  # add, remove, replace
    path: Optional[str] = None
    value: Optional[Any] = None


class PatchRequest(BaseModel):
    """PATCH запрос SCIM"""
    schemas: List[str] = Field(default_factory=lambda: [SCIMSchema.PATCH_OP.value])
    Operations: List[PatchOperation]


class ListResponse(BaseModel):
    """Ответ со списком ресурсов SCIM"""
    schemas: List[str] = Field(default_factory=lambda: [SCIMSchema.LIST_RESPONSE.value])
    totalResults: int
    startIndex: Optional[int] = None
    itemsPerPage: Optional[int] = None
    Resources: List[Dict[str, Any]] = Field(default_factory=list)


class SCIMError(BaseModel):
    """Ошибка SCIM"""
    schemas: List[str] = Field(default_factory=lambda: [SCIMSchema.ERROR.value])
    status: str
    scimType: Optional[str] = None
    detail: Optional[str] = None
