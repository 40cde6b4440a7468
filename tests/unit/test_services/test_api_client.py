"""Tests for the REST API client."""

import asyncio

import httpx
import pytest


def make_client(handler):
    from schoolsync.services.api_client import ApiClient

    return ApiClient("http://api.test/", transport=httpx.MockTransport(handler))


def test_get_json():
    def handler(request):
        assert request.url.path == "/api/subjects"
        assert request.headers["Content-Type"] == "application/json"
        return httpx.Response(200, json=[{"id": 1, "name": "Maths"}])

    async def run():
        async with make_client(handler) as api:
            return await api.get_json("/api/subjects")

    assert asyncio.run(run()) == [{"id": 1, "name": "Maths"}]


def test_non_2xx_raises_api_error_with_body():
    from schoolsync.core.errors import ApiError

    def handler(request):
        return httpx.Response(422, text="name is required")

    async def run():
        async with make_client(handler) as api:
            await api.post_json("/api/students", {})

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.status_code == 422
    assert exc_info.value.message == "name is required"
    assert str(exc_info.value) == "[422] name is required"


def test_empty_error_body_gets_status_message():
    from schoolsync.core.errors import ApiError

    async def run():
        async with make_client(lambda request: httpx.Response(503)) as api:
            await api.get_json("/api/results")

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.message == "Server 503"


def test_transport_failure_raises_api_error():
    from schoolsync.core.errors import ApiError

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        async with make_client(handler) as api:
            await api.get_json("/api/students")

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.status_code is None
    assert "connection refused" in exc_info.value.message


def test_delete_with_empty_body_returns_none():
    async def run():
        async with make_client(lambda request: httpx.Response(204)) as api:
            return await api.delete("/api/students/3")

    assert asyncio.run(run()) is None


def test_put_sends_json_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = request.content
        return httpx.Response(200, json={"success": True})

    async def run():
        async with make_client(handler) as api:
            return await api.put_json("/api/teachers/4", {"name": "Mr. Obi"})

    assert asyncio.run(run()) == {"success": True}
    assert seen["method"] == "PUT"
    assert b"Mr. Obi" in seen["body"]


def test_client_is_recreated_after_close():
    async def run():
        api = make_client(lambda request: httpx.Response(200, json=[]))
        await api.get_json("/api/admins")
        await api.aclose()
        result = await api.get_json("/api/admins")
        await api.aclose()
        return result

    assert asyncio.run(run()) == []


def test_get_with_retry_doubles_timeout_until_success():
    timeouts = []

    def handler(request):
        timeouts.append(request.extensions["timeout"]["read"])
        if len(timeouts) < 3:
            return httpx.Response(503, text="busy")
        return httpx.Response(200, json=[{"id": 1}])

    async def run():
        async with make_client(handler) as api:
            return await api.get_json_with_retry(
                "/api/students", max_attempts=3, base_timeout=2.0, backoff=0
            )

    assert asyncio.run(run()) == [{"id": 1}]
    assert timeouts == [2.0, 4.0, 8.0]


def test_get_with_retry_raises_last_error():
    from schoolsync.core.errors import ApiError

    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, text=f"failure {len(calls)}")

    async def run():
        async with make_client(handler) as api:
            await api.get_json_with_retry("/api/students", max_attempts=2, backoff=0)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(run())

    assert len(calls) == 2
    assert exc_info.value.message == "failure 2"
