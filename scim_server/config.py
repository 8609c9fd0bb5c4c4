"""Конфигурация приложения"""

from pydantic_settings import BaseSettings
from pydantic import HttpUrl
from typing import List, Optional


class Settings(BaseSettings):
    """Настройки приложения"""

    # Upstream API настройки
    upstream_base_url: HttpUrl = "http://localhost:8080/scim/v2"  # pyright: ignore[reportAssignmentType]
    upstream_timeout: int = 30
    upstream_max_connections: int = 100
    upstream_auth_token: Optional[str] = None

    # Сервер
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    base_path: str = "/v2"

    # Типы ресурсов, для которых разрешены create/replace/modify/delete.
    # Остальные публикуются только на чтение и отвечают 501.
    writable_resource_types: str = "Users,Groups"

    # Логирование
    log_level: str = "INFO"

    # Безопасность
    cors_origins: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def writable_resource_type_names(self) -> List[str]:
        """Список записываемых типов ресурсов"""
        return [name.strip() for name in self.writable_resource_types.split(",") if name.strip()]


# Глобальный экземпляр настроек
settings = Settings()
