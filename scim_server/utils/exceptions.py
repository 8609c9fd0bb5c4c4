"""Кастомные исключения для SCIM Resource Server"""


class SCIMServerError(Exception):
    """Базовое исключение для SCIM Resource Server"""

    def __init__(self, message: str, status_code: int = 500, scim_type: str | None = None):
        self.message = message
        self.status_code = status_code
        self.scim_type = scim_type
        super().__init__(message)


class InvalidRequestError(SCIMServerError):
    """Некорректный или нераспознанный параметр запроса"""

    def __init__(self, message: str, scim_type: str = "invalidValue"):
        super().__init__(
            message=message,
            status_code=400,
            scim_type=scim_type
        )


class InvalidFilterError(SCIMServerError):
    """Ошибка при парсинге или валидации фильтра"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            scim_type="invalidFilter"
        )


class PatchOperationError(SCIMServerError):
    """Ошибка при выполнении PATCH операции"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            scim_type="invalidSyntax"
        )


class ResourceNotFoundError(SCIMServerError):
    """Ресурс не найден"""

    def __init__(self, resource_id: str, message: str | None = None):
        self.resource_id = resource_id
        super().__init__(
            message=message or f"Resource {resource_id} not found",
            status_code=404
        )


class ResourceConflictError(SCIMServerError):
    """Конфликт уникальности при создании или изменении ресурса"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=409,
            scim_type="uniqueness"
        )


class NotImplementedOperationError(SCIMServerError):
    """Операция входит в контракт, но не поддерживается данным endpoint"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=501
        )


class UpstreamError(SCIMServerError):
    """Ошибка при обращении к upstream API"""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(
            message=message,
            status_code=status_code
        )


class ConfigurationError(SCIMServerError):
    """Ошибка конфигурации"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=500
        )
