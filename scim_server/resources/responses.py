"""HTTP ответы с SCIM media type"""

from typing import Optional

from fastapi.responses import JSONResponse

from ..models.scim import SCIMError

SCIM_MEDIA_TYPE = "application/scim+json"


class ScimJSONResponse(JSONResponse):
    """JSON ответ с Content-Type application/scim+json"""
    media_type = SCIM_MEDIA_TYPE


def scim_error_response(status_code: int, detail: Optional[str], scim_type: Optional[str] = None) -> ScimJSONResponse:
    """Формирует SCIM Error ответ"""
    error_response = SCIMError(
        status=str(status_code),
        scimType=scim_type,
        detail=detail
    )

    return ScimJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(exclude_none=True)
    )
