"""Сервисы для SCIM Resource Server"""

from .attributes import project_attributes
from .upstream import (
    UpstreamClient,
    UpstreamResourceEndpoint,
    WritableUpstreamResourceEndpoint,
    search_request_to_params,
)

__all__ = [
    "project_attributes",
    "UpstreamClient",
    "UpstreamResourceEndpoint",
    "WritableUpstreamResourceEndpoint",
    "search_request_to_params",
]
