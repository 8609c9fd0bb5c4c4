"""Модели данных для SCIM Resource Server"""

from .scim import (
    SCIMSchema,
    SortOrder,
    Meta,
    Email,
    PhoneNumber,
    Name,
    ScimResource,
    User,
    Group,
    GroupMember,
    SearchRequest,
    PatchOperation,
    PatchRequest,
    ListResponse,
    SCIMError,
)

__all__ = [
    "SCIMSchema",
    "SortOrder",
    "Meta",
    "Email",
    "PhoneNumber",
    "Name",
    "ScimResource",
    "User",
    "Group",
    "GroupMember",
    "SearchRequest",
    "PatchOperation",
    "PatchRequest",
    "ListResponse",
    "SCIMError",
]
