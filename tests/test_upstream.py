"""Тесты endpoint поверх upstream SCIM API"""

import json

import httpx
import pytest

from scim_server.models.scim import PatchOperation, PatchRequest, SearchRequest, SortOrder, User
from scim_server.services.upstream import (
    UpstreamClient,
    UpstreamResourceEndpoint,
    WritableUpstreamResourceEndpoint,
    search_request_to_params,
)
from scim_server.utils.exceptions import (
    InvalidFilterError,
    NotImplementedOperationError,
    PatchOperationError,
    ResourceConflictError,
    ResourceNotFoundError,
    UpstreamError,
)

BASE_URL = "http://upstream.test/scim/v2"

BOB = {
    "schemas": ["urn:ietf:params:scim:schemas:core:2.0:User"],
    "id": "u1",
    "userName": "bob",
    "emails": [{"value": "bob@example.com"}],
}


def _error(status: int, detail: str, scim_type: str | None = None) -> httpx.Response:
    body = {"schemas": ["urn:ietf:params:scim:api:messages:2.0:Error"], "status": str(status), "detail": detail}
    if scim_type:
        body["scimType"] = scim_type
    return httpx.Response(status, json=body)


class RecordingHandler:
    """Обработчик MockTransport, запоминающий запросы"""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _endpoint(handler, endpoint_class=WritableUpstreamResourceEndpoint):
    client = UpstreamClient(base_url=BASE_URL, auth_token="secret", transport=httpx.MockTransport(handler))
    return endpoint_class(client, User, "/Users")


def test_search_request_to_params_omits_absent_fields():
    assert search_request_to_params(SearchRequest()) == {}
    assert search_request_to_params(
        SearchRequest(
            attributes=["userName"],
            filter='userName eq "bob"',
            sortBy="userName",
            sortOrder=SortOrder.DESCENDING,
            startIndex=0,
            count=10,
        )
    ) == {
        "filter": 'userName eq "bob"',
        "sortBy": "userName",
        "sortOrder": "descending",
        "startIndex": 0,
        "count": 10,
    }


@pytest.mark.asyncio
async def test_search_proxies_and_projects():
    handler = RecordingHandler(httpx.Response(200, json={
        "schemas": ["urn:ietf:params:scim:api:messages:2.0:ListResponse"],
        "totalResults": 7,
        "startIndex": 1,
        "Resources": [BOB],
    }))
    endpoint = _endpoint(handler, UpstreamResourceEndpoint)

    stream = await endpoint.search(SearchRequest(filter='userName eq "bob"', excludedAttributes=["emails"]))
    resources = [resource async for resource in stream]

    request = handler.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/scim/v2/Users"
    assert request.url.params["filter"] == 'userName eq "bob"'
    assert "excludedAttributes" not in request.url.params
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Accept"] == "application/scim+json"

    assert stream.total_results == 7
    assert stream.start_index == 1
    assert stream.items_per_page == 1
    assert resources == [{
        "schemas": ["urn:ietf:params:scim:schemas:core:2.0:User"],
        "id": "u1",
        "userName": "bob",
    }]


@pytest.mark.asyncio
async def test_list_via_get_uses_upstream_search():
    handler = RecordingHandler(httpx.Response(200, json={"totalResults": 0, "Resources": []}))
    endpoint = _endpoint(handler, UpstreamResourceEndpoint)

    stream = await endpoint.list_via_get(sort_by="userName", sort_order="ascending", page_size=5)

    params = handler.requests[0].url.params
    assert params["sortBy"] == "userName"
    assert params["sortOrder"] == "ascending"
    assert params["count"] == "5"
    assert "startIndex" not in params
    assert stream.total_results == 0


@pytest.mark.asyncio
async def test_retrieve():
    handler = RecordingHandler(httpx.Response(200, json=BOB))
    endpoint = _endpoint(handler, UpstreamResourceEndpoint)

    user = await endpoint.retrieve("u1")

    assert handler.requests[0].url.path == "/scim/v2/Users/u1"
    assert isinstance(user, User)
    assert user.userName == "bob"


@pytest.mark.asyncio
async def test_read_only_endpoint_does_not_call_upstream_for_writes():
    handler = RecordingHandler(httpx.Response(200, json=BOB))
    endpoint = _endpoint(handler, UpstreamResourceEndpoint)

    with pytest.raises(NotImplementedOperationError):
        await endpoint.delete("u1")
    with pytest.raises(NotImplementedOperationError):
        await endpoint.create(User(userName="eve"))

    assert handler.requests == []


@pytest.mark.asyncio
async def test_create_sends_scim_json():
    handler = RecordingHandler(httpx.Response(201, json={**BOB, "id": "u9", "userName": "eve"}))
    endpoint = _endpoint(handler)

    created = await endpoint.create(User(userName="eve"))

    request = handler.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/scim+json"
    assert json.loads(request.content)["userName"] == "eve"
    assert created.id == "u9"


@pytest.mark.asyncio
async def test_modify_sends_patch_operations():
    handler = RecordingHandler(httpx.Response(200, json={**BOB, "active": False}))
    endpoint = _endpoint(handler)

    updated = await endpoint.modify(
        "u1",
        PatchRequest(Operations=[
            PatchOperation(op="replace", path="active", value=False),
            PatchOperation(op="remove", path="title"),
        ]),
    )

    body = json.loads(handler.requests[0].content)
    assert handler.requests[0].method == "PATCH"
    assert body["Operations"] == [
        {"op": "replace", "path": "active", "value": False},
        {"op": "remove", "path": "title"},
    ]
    assert updated.active is False


@pytest.mark.asyncio
async def test_modify_with_no_content_reads_resource_back():
    responses = iter([httpx.Response(204), httpx.Response(200, json=BOB)])
    methods = []

    def handler(request):
        methods.append(request.method)
        return next(responses)

    updated = await _endpoint(handler).modify("u1", PatchRequest(Operations=[PatchOperation(op="remove", path="title")]))

    assert methods == ["PATCH", "GET"]
    assert updated.id == "u1"


@pytest.mark.asyncio
async def test_delete():
    handler = RecordingHandler(httpx.Response(204))

    assert await _endpoint(handler).delete("u1") is None
    assert handler.requests[0].method == "DELETE"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response, operation, expected",
    [
        (_error(404, "User u1 not found"), "retrieve", ResourceNotFoundError),
        (_error(409, "userName exists"), "create", ResourceConflictError),
        (_error(400, "bad filter", "invalidFilter"), "search", InvalidFilterError),
        (_error(400, "bad path", "invalidPath"), "modify", PatchOperationError),
        (_error(501, "PUT not supported"), "replace", NotImplementedOperationError),
        (httpx.Response(500, text="boom"), "retrieve", UpstreamError),
    ],
)
async def test_upstream_errors_are_mapped(response, operation, expected):
    endpoint = _endpoint(RecordingHandler(response))
    calls = {
        "retrieve": lambda: endpoint.retrieve("u1"),
        "create": lambda: endpoint.create(User(userName="bob")),
        "search": lambda: endpoint.search(SearchRequest(filter="(")),
        "modify": lambda: endpoint.modify("u1", PatchRequest(Operations=[PatchOperation(op="remove", path="x[")])),
        "replace": lambda: endpoint.replace("u1", User(userName="bob")),
    }

    with pytest.raises(expected):
        await calls[operation]()


@pytest.mark.asyncio
async def test_connection_failure_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await _endpoint(handler).retrieve("u1")

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_malformed_list_response_is_upstream_error():
    endpoint = _endpoint(RecordingHandler(httpx.Response(200, json={"Resources": []})))

    with pytest.raises(UpstreamError):
        await endpoint.search(SearchRequest())
