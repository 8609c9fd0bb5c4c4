"""ServiceProviderConfig роутер для SCIM API"""

from fastapi import APIRouter
from typing import Dict, Any

from ..models.scim import SCIMSchema

router = APIRouter(tags=["service-provider-config"])


@router.get("/ServiceProviderConfig")
async def get_service_provider_config() -> Dict[str, Any]:
    """Возвращает конфигурацию SCIM сервиса согласно RFC 7643"""

    return {
        "schemas": [SCIMSchema.SERVICE_PROVIDER_CONFIG.value],
        "documentationUri": "https://tools.ietf.org/html/rfc7644",
        "patch": {
            "supported": True
        },
        "bulk": {
            "supported": False,
            "maxOperations": 0,
            "maxPayloadSize": 0
        },
        "filter": {
            "supported": True,
            "maxResults": 1000
        },
        "changePassword": {
            "supported": False
        },
        "sort": {
            "supported": True
        },
        "etag": {
            "supported": False
        },
        "authenticationSchemes": [
            {
                "type": "oauthbearertoken",
                "name": "OAuth Bearer Token",
                "description": "Authentication scheme using the OAuth Bearer Token Standard",
                "specUri": "https://tools.ietf.org/html/rfc6750"
            }
        ],
        "meta": {
            "location": "/v2/ServiceProviderConfig",
            "resourceType": "ServiceProviderConfig"
        }
    }
