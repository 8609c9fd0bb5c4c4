"""SCIM endpoint для типов ресурсов и их привязка к HTTP"""

from .endpoint import AbstractResourceEndpoint, split_attribute_list, parse_sort_order
from .streaming import ListResponseStream, iter_list_response, dump_resource
from .router import build_resource_router
from .responses import SCIM_MEDIA_TYPE, ScimJSONResponse, scim_error_response

__all__ = [
    "AbstractResourceEndpoint",
    "split_attribute_list",
    "parse_sort_order",
    "ListResponseStream",
    "iter_list_response",
    "dump_resource",
    "build_resource_router",
    "SCIM_MEDIA_TYPE",
    "ScimJSONResponse",
    "scim_error_response",
]
