import httpx
import pytest

from coding_agent_mcp.backend import BackendForwarder
from coding_agent_mcp.core import Settings
from coding_agent_mcp.core.exceptions import BackendError
from coding_agent_mcp.core.tools.models import RouteGroup


@pytest.mark.asyncio
async def test_request_targets_group_prefix_with_auth_header(forwarder, backend) -> None:
    backend.respond_with(200, json={"quota": 10})

    payload = await forwarder.request(RouteGroup.CORE, "GET", "/quota")

    assert payload == {"quota": 10}
    request = backend.last
    assert str(request.url) == "http://backend.test/api/coding-agent/quota"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_no_auth_header_without_api_key(backend) -> None:
    forwarder = BackendForwarder(Settings(backend_url="http://backend.test/"), transport=httpx.MockTransport(backend))

    await forwarder.request(RouteGroup.GITHUB, "GET", "/status")

    assert "Authorization" not in backend.last.headers
    assert str(backend.last.url) == "http://backend.test/api/github/status"
    await forwarder.aclose()


@pytest.mark.asyncio
async def test_error_field_of_body_becomes_message(forwarder, backend) -> None:
    backend.respond_with(500, json={"error": "quota exceeded"})

    with pytest.raises(BackendError) as exc_info:
        await forwarder.request(RouteGroup.CORE, "POST", "/verify", json={"code": "x"})

    assert exc_info.value.message == "quota exceeded"
    assert exc_info.value.status_code == 500
    assert exc_info.value.details == {"error": "quota exceeded"}


@pytest.mark.asyncio
async def test_nested_error_message_is_used(forwarder, backend) -> None:
    backend.respond_with(400, json={"error": {"message": "bad plan", "code": "E1"}})

    with pytest.raises(BackendError, match="bad plan"):
        await forwarder.request(RouteGroup.PLANNING, "GET", "/p1")


@pytest.mark.asyncio
async def test_status_without_error_body_uses_generic_message(forwarder, backend) -> None:
    backend.respond_with(404)

    with pytest.raises(BackendError) as exc_info:
        await forwarder.request(RouteGroup.CORE, "GET", "/sources/nope")

    assert exc_info.value.message == "Request failed with status code 404"
    assert exc_info.value.details is None


@pytest.mark.asyncio
async def test_plain_text_error_body_is_kept_as_details(forwarder, backend) -> None:
    backend.respond_with(502, text="Bad Gateway")

    with pytest.raises(BackendError) as exc_info:
        await forwarder.request(RouteGroup.CORE, "GET", "/stats")

    assert exc_info.value.details == "Bad Gateway"


@pytest.mark.asyncio
async def test_timeout_is_reported(forwarder, backend) -> None:
    backend.raise_error(httpx.ReadTimeout("timed out"))

    with pytest.raises(BackendError, match="timed out after 30s"):
        await forwarder.request(RouteGroup.CORE, "GET", "/quota")


@pytest.mark.asyncio
async def test_connection_error_is_reported(forwarder, backend) -> None:
    backend.raise_error(httpx.ConnectError("connection refused"))

    with pytest.raises(BackendError, match="connection refused") as exc_info:
        await forwarder.request(RouteGroup.CORE, "GET", "/quota")

    assert exc_info.value.status_code is None
    assert exc_info.value.details is None


@pytest.mark.asyncio
async def test_empty_and_text_bodies(forwarder, backend) -> None:
    backend.respond_with(204)
    assert await forwarder.request(RouteGroup.CORE, "DELETE", "/sources/s1") is None

    backend.respond_with(200, text="plain")
    assert await forwarder.request(RouteGroup.CORE, "GET", "/websocket/info") == "plain"


@pytest.mark.asyncio
async def test_per_call_timeout_override(forwarder, backend) -> None:
    await forwarder.request(RouteGroup.SEARCH, "POST", "/proxy", json={"query": "q"}, timeout=15.0)

    assert backend.last.extensions["timeout"]["read"] == 15.0


@pytest.mark.asyncio
async def test_context_manager_closes_client(settings, backend) -> None:
    async with BackendForwarder(settings, transport=httpx.MockTransport(backend)) as forwarder:
        await forwarder.request(RouteGroup.CORE, "GET", "/quota")

    with pytest.raises(RuntimeError):
        await forwarder.request(RouteGroup.CORE, "GET", "/quota")
