"""Общие фикстуры для тестов SCIM endpoint"""

from typing import Dict, List, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from scim_server.models.scim import Name, PatchRequest, SearchRequest, User
from scim_server.resources.endpoint import AbstractResourceEndpoint
from scim_server.resources.router import build_resource_router
from scim_server.resources.streaming import ListResponseStream
from scim_server.utils.error_handlers import register_exception_handlers
from scim_server.utils.exceptions import ResourceNotFoundError


def make_user(user_id: str, user_name: str, **kwargs) -> User:
    """Создает пользователя с разумными значениями по умолчанию"""
    return User(id=user_id, userName=user_name, active=True, **kwargs)


class ReadOnlyUserEndpoint(AbstractResourceEndpoint[User]):
    """Endpoint, который переопределяет только search и retrieve"""

    def __init__(self, users: Optional[List[User]] = None):
        self.users: Dict[str, User] = {user.id: user for user in users or []}
        self.search_requests: List[SearchRequest] = []

    async def search(self, search_request: SearchRequest) -> ListResponseStream[User]:
        self.search_requests.append(search_request)
        users = list(self.users.values())
        return ListResponseStream(
            users,
            total_results=len(users),
            start_index=search_request.startIndex,
            items_per_page=len(users)
        )

    async def retrieve(self, resource_id: str) -> User:
        if resource_id not in self.users:
            raise ResourceNotFoundError(resource_id)
        return self.users[resource_id]


class WritableUserEndpoint(ReadOnlyUserEndpoint):
    """Endpoint с поддержкой всех операций поверх словаря"""

    async def create(self, resource: User) -> User:
        created = resource.model_copy(update={"id": f"u{len(self.users) + 1}"})
        self.users[created.id] = created
        return created

    async def replace(self, resource_id: str, resource: User) -> User:
        await self.retrieve(resource_id)
        updated = resource.model_copy(update={"id": resource_id})
        self.users[resource_id] = updated
        return updated

    async def modify(self, resource_id: str, patch_request: PatchRequest) -> User:
        user = await self.retrieve(resource_id)
        changes = {
            operation.path: operation.value
            for operation in patch_request.Operations
            if operation.op.lower() == "replace" and operation.path
        }
        updated = user.model_copy(update=changes)
        self.users[resource_id] = updated
        return updated

    async def delete(self, resource_id: str) -> None:
        await self.retrieve(resource_id)
        del self.users[resource_id]


def build_app(endpoint: AbstractResourceEndpoint) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(build_resource_router(endpoint, User, "/Users"))
    return app


@pytest.fixture
def users() -> List[User]:
    return [
        make_user("u1", "bob", name=Name(givenName="Bob", familyName="Smith")),
        make_user("u2", "alice", displayName="Alice"),
    ]


@pytest.fixture
def read_only_endpoint(users) -> ReadOnlyUserEndpoint:
    return ReadOnlyUserEndpoint(users)


@pytest.fixture
def writable_endpoint(users) -> WritableUserEndpoint:
    return WritableUserEndpoint(users)


@pytest.fixture
def read_only_client(read_only_endpoint) -> TestClient:
    return TestClient(build_app(read_only_endpoint))


@pytest.fixture
def writable_client(writable_endpoint) -> TestClient:
    return TestClient(build_app(writable_endpoint))
