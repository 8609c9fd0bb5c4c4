"""Основное FastAPI приложение для SCIM Resource Server"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Dict, List, Tuple, Type

from .config import settings
from .models.scim import Group, ScimResource, User
from .resources.endpoint import AbstractResourceEndpoint
from .resources.router import build_resource_router
from .routers import health_router, service_provider_config_router, resource_types_router
from .services.upstream import UpstreamClient, UpstreamResourceEndpoint, WritableUpstreamResourceEndpoint
from .utils.error_handlers import register_exception_handlers
from .utils.exceptions import ConfigurationError


# Настройка логирования
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

# Типы ресурсов: путь -> модель
RESOURCE_MODELS: Dict[str, Type[ScimResource]] = {
    "Users": User,
    "Groups": Group,
}


def build_endpoints(client: UpstreamClient) -> List[Tuple[str, AbstractResourceEndpoint, Type[ScimResource]]]:
    """Создает endpoint для каждого типа ресурсов согласно настройкам"""
    writable = settings.writable_resource_type_names()
    unknown = set(writable) - set(RESOURCE_MODELS)
    if unknown:
        raise ConfigurationError(f"Unknown writable resource types: {', '.join(sorted(unknown))}")

    endpoints = []
    for name, model in RESOURCE_MODELS.items():
        endpoint_class = WritableUpstreamResourceEndpoint if name in writable else UpstreamResourceEndpoint
        endpoint = endpoint_class(client, model, f"/{name}")
        logger.info(f"{name}: {'read-write' if name in writable else 'read-only'}")
        endpoints.append((name, endpoint, model))
    return endpoints


upstream_client = UpstreamClient()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # Startup
    logger.info("Starting SCIM Resource Server...")
    logger.info(f"Upstream URL: {settings.upstream_base_url}")

    yield

    # Shutdown
    logger.info("Shutting down SCIM Resource Server...")
    await upstream_client.close()


# Создание FastAPI приложения
app = FastAPI(
    title="SCIM Resource Server",
    description="SCIM 2.0 endpoints для пользователей и групп поверх upstream SCIM API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Настройка CORS
cors_origins = settings.cors_origins.split(",") if settings.cors_origins != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Middleware для логирования запросов
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Middleware для логирования HTTP запросов"""
    start_time = time.time()

    # Логируем входящий запрос
    logger.info(f"Request: {request.method} {request.url}")

    response = await call_next(request)

    # Логируем время выполнения
    process_time = time.time() - start_time
    logger.info(f"Response: {response.status_code} - {process_time:.3f}s")

    return response


# Подключение роутеров
app.include_router(health_router)

# SCIM маршруты публикуются с префиксом base_path и без него
for name, endpoint, model in build_endpoints(upstream_client):
    app.include_router(build_resource_router(endpoint, model, f"{settings.base_path}/{name}", tags=[name.lower()]))
    app.include_router(build_resource_router(endpoint, model, f"/{name}", tags=[name.lower()]))

app.include_router(service_provider_config_router, prefix=settings.base_path)
app.include_router(resource_types_router, prefix=settings.base_path)
app.include_router(service_provider_config_router)
app.include_router(resource_types_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "scim_server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True,
        log_level=settings.log_level.lower()
    )
