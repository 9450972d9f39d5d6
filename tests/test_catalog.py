import json
from typing import Any, Dict

import pytest

from coding_agent_mcp.catalog import PROXIED_TOOLS, build_registry

REGISTRY = build_registry()

PROXIED_NAMES = [tool.name for tool in PROXIED_TOOLS]

# Values that satisfy the format checks a generic placeholder would fail
SAMPLE_VALUES: Dict[str, Any] = {
    "webhookUrl": "https://agent.example.com/hook",
    "webhookSecret": "s" * 16,
    "verification": {"isValid": True, "score": 90},
}


def sample_value(name: str, prop: Dict[str, Any]) -> Any:
    if name in SAMPLE_VALUES:
        return SAMPLE_VALUES[name]
    if "enum" in prop:
        return prop["enum"][0]
    return {"string": "x", "integer": 1, "number": 1, "boolean": True, "array": [], "object": {}}[prop["type"]]


def required_arguments(tool_name: str) -> Dict[str, Any]:
    schema = REGISTRY.get(tool_name).parameters
    return {name: sample_value(name, schema["properties"][name]) for name in schema.get("required", [])}


REQUIRED_FIELD_CASES = [
    (name, field) for name in PROXIED_NAMES for field in REGISTRY.get(name).parameters.get("required", [])
]


def test_catalog_contents() -> None:
    names = [tool.name for tool in REGISTRY.list_tools()]

    assert len(names) == 41
    assert len(set(names)) == len(names)
    assert names[-2:] == ["get_current_time", "web_search"]
    assert sum(1 for tool in REGISTRY.list_tools() if tool.route is not None) == 39


@pytest.mark.parametrize("tool_name", [tool.name for tool in REGISTRY.list_tools()])
def test_published_schemas_are_flat_objects(tool_name: str) -> None:
    tool = REGISTRY.get(tool_name)
    text = json.dumps(tool.parameters)

    assert tool.description
    assert tool.parameters["type"] == "object"
    assert "$ref" not in text
    assert "$defs" not in text
    assert "anyOf" not in text


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name", PROXIED_NAMES)
async def test_required_arguments_make_exactly_one_call(tool_name: str, dispatcher, backend) -> None:
    backend.respond_with(200, json={"tool": tool_name, "items": [1, 2, 3]})

    envelope = await dispatcher.handle(tool_name, required_arguments(tool_name))

    assert not envelope.is_error, envelope.text
    assert envelope.payload() == {"tool": tool_name, "items": [1, 2, 3]}
    assert len(backend.requests) == 1
    route = REGISTRY.get(tool_name).route
    assert backend.last.method == route.method
    assert backend.last.url.path.startswith(route.group.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("tool_name,field", REQUIRED_FIELD_CASES)
async def test_missing_required_field_never_reaches_backend(tool_name: str, field: str, dispatcher, backend) -> None:
    arguments = required_arguments(tool_name)
    del arguments[field]

    envelope = await dispatcher.handle(tool_name, arguments)

    assert envelope.is_error
    assert field in envelope.payload()["error"]
    assert backend.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("secret", ["", "a", "fifteen-chars!!"])
async def test_short_webhook_secret_always_fails(secret: str, dispatcher, backend) -> None:
    envelope = await dispatcher.handle(
        "register_webhook",
        {"agentSessionId": "sess-1", "webhookUrl": "https://agent.example.com/hook", "webhookSecret": secret},
    )

    assert envelope.is_error
    assert [issue["field"] for issue in envelope.payload()["details"]] == ["webhookSecret"]
    assert backend.requests == []


@pytest.mark.asyncio
async def test_create_agent_notebook_checks_optional_webhook(dispatcher, backend) -> None:
    envelope = await dispatcher.handle(
        "create_agent_notebook",
        {"agentName": "Claude", "agentIdentifier": "claude-3", "webhookUrl": "nope"},
    )

    assert envelope.is_error
    assert backend.requests == []


@pytest.mark.asyncio
async def test_github_search_sends_q(dispatcher, backend) -> None:
    await dispatcher.handle("github_search_code", {"query": "useEffect", "language": "typescript"})

    assert backend.last.url.path == "/api/github/search"
    assert dict(backend.last.url.params) == {"q": "useEffect", "language": "typescript", "perPage": "20"}


@pytest.mark.asyncio
async def test_github_get_file_keeps_nested_path(dispatcher, backend) -> None:
    await dispatcher.handle("github_get_file", {"owner": "octo", "repo": "app", "path": "src/lib/index.ts"})

    assert backend.last.url.path == "/api/github/repos/octo/app/contents/src/lib/index.ts"


@pytest.mark.asyncio
async def test_github_list_repos_bounds(dispatcher, backend) -> None:
    envelope = await dispatcher.handle("github_list_repos", {"perPage": 101})

    assert envelope.is_error
    assert backend.requests == []

    await dispatcher.handle("github_list_repos", {})
    assert dict(backend.last.url.params) == {"type": "all", "sort": "updated", "perPage": "30", "page": "1"}


@pytest.mark.asyncio
async def test_list_plans_defaults(dispatcher, backend) -> None:
    await dispatcher.handle("list_plans", {"status": "active"})

    assert backend.last.url.path == "/api/planning/"
    assert dict(backend.last.url.params) == {
        "status": "active",
        "includeArchived": "false",
        "limit": "50",
        "offset": "0",
    }


@pytest.mark.asyncio
async def test_update_task_status_rejects_unknown_status(dispatcher, backend) -> None:
    envelope = await dispatcher.handle("update_task_status", {"planId": "p", "taskId": "t", "status": "done"})

    assert envelope.is_error
    assert envelope.payload()["details"][0]["field"] == "status"
    assert backend.requests == []


@pytest.mark.asyncio
async def test_update_source_uses_put_with_body(dispatcher, backend) -> None:
    await dispatcher.handle("update_source", {"sourceId": "s1", "title": "New"})

    assert backend.last.method == "PUT"
    assert backend.last.url.path == "/api/coding-agent/sources/s1"
    assert backend.last_json() == {"title": "New", "revalidate": False}


@pytest.mark.asyncio
async def test_create_task_body(dispatcher, backend) -> None:
    await dispatcher.handle("create_task", {"planId": "p1", "title": "Write tests", "requirementIds": ["r1"]})

    assert backend.last.url.path == "/api/planning/p1/tasks"
    assert backend.last_json() == {"title": "Write tests", "requirementIds": ["r1"], "priority": "medium"}


@pytest.mark.asyncio
async def test_zero_limits_are_forwarded(dispatcher, backend) -> None:
    envelope = await dispatcher.handle("search_sources", {"limit": 0})

    assert not envelope.is_error
    assert backend.last.url.params["limit"] == "0"

    envelope = await dispatcher.handle("list_plans", {"limit": 0})

    assert not envelope.is_error
    assert backend.last.url.params["limit"] == "0"


@pytest.mark.asyncio
async def test_integer_is_accepted_for_number_field(dispatcher, backend) -> None:
    arguments = {
        "code": "x=1",
        "language": "python",
        "title": "Snippet",
        "notebookId": "n1",
        "verification": {"isValid": True, "score": 90},
    }
    envelope = await dispatcher.handle("save_code_with_context", arguments)

    assert not envelope.is_error
    assert backend.last_json()["verification"]["score"] == 90
