"""ResourceTypes роутер для SCIM API"""

from fastapi import APIRouter
from typing import Dict, Any

from ..models.scim import SCIMSchema
from ..utils.exceptions import ResourceNotFoundError

router = APIRouter(tags=["resource-types"])

RESOURCE_TYPES: Dict[str, Dict[str, str]] = {
    "User": {
        "endpoint": "/Users",
        "description": "User Account",
        "schema": SCIMSchema.USER.value,
    },
    "Group": {
        "endpoint": "/Groups",
        "description": "Group",
        "schema": SCIMSchema.GROUP.value,
    },
}


def _resource_type(name: str) -> Dict[str, Any]:
    definition = RESOURCE_TYPES[name]
    return {
        "schemas": [SCIMSchema.RESOURCE_TYPE.value],
        "id": name,
        "name": name,
        "endpoint": definition["endpoint"],
        "description": definition["description"],
        "schema": definition["schema"],
        "meta": {
            "location": f"/v2/ResourceTypes/{name}",
            "resourceType": "ResourceType"
        }
    }


@router.get("/ResourceTypes")
async def get_resource_types() -> Dict[str, Any]:
    """Возвращает список поддерживаемых типов ресурсов согласно RFC 7644"""

    resources = [_resource_type(name) for name in RESOURCE_TYPES]
    return {
        "schemas": [SCIMSchema.LIST_RESPONSE.value],
        "totalResults": len(resources),
        "startIndex": 1,
        "itemsPerPage": len(resources),
        "Resources": resources
    }


@router.get("/ResourceTypes/{name}")
async def get_resource_type(name: str) -> Dict[str, Any]:
    """Возвращает информацию об одном типе ресурса"""

    if name not in RESOURCE_TYPES:
        raise ResourceNotFoundError(name, message=f"Resource type {name} not found")
    return _resource_type(name)
