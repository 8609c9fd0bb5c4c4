"""Утилиты для SCIM Resource Server"""

from .exceptions import (
    SCIMServerError,
    InvalidRequestError,
    InvalidFilterError,
    PatchOperationError,
    ResourceNotFoundError,
    ResourceConflictError,
    NotImplementedOperationError,
    UpstreamError,
    ConfigurationError
)

__all__ = [
    "SCIMServerError",
    "InvalidRequestError",
    "InvalidFilterError",
    "PatchOperationError",
    "ResourceNotFoundError",
    "ResourceConflictError",
    "NotImplementedOperationError",
    "UpstreamError",
    "ConfigurationError",
]
