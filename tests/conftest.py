import json
from typing import Any, Callable, List

import httpx
import pytest

from coding_agent_mcp.backend import BackendForwarder
from coding_agent_mcp.catalog import build_registry
from coding_agent_mcp.core import Dispatcher, Settings, ToolContext


class RecordingBackend:
    """Fake backend for ``httpx.MockTransport`` that records every request it receives."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"ok": True}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond_with(self, status_code: int = 200, **kwargs: Any) -> None:
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def raise_error(self, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = handler

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def settings() -> Settings:
    return Settings(backend_url="http://backend.test", api_key="test-key")


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def forwarder(settings: Settings, backend: RecordingBackend) -> BackendForwarder:
    return BackendForwarder(settings, transport=httpx.MockTransport(backend))


@pytest.fixture
def dispatcher(settings: Settings, forwarder: BackendForwarder) -> Dispatcher:
    return Dispatcher(registry=build_registry(), context=ToolContext(settings=settings, backend=forwarder))
