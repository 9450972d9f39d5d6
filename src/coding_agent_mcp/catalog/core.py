"""Core route group: code verification, sources, notebooks, followups, webhooks, quota."""

from functools import partial
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ..core.tools.models import Route, RouteGroup
from .base import NoArguments, NonEmptyStr, ProxiedTool, ToolArguments, UrlStr, WebhookSecret

_route = partial(Route, group=RouteGroup.CORE)


# ==================== CODE VERIFICATION ====================


class VerifyCodeArgs(ToolArguments):
    code: NonEmptyStr = Field(description="The code to verify")
    language: NonEmptyStr = Field(description="Programming language (javascript, typescript, python, dart, json, etc.)")
    context: Optional[str] = Field(default=None, description="Optional context about what the code should do")
    strict_mode: bool = Field(default=False, description="Enable strict verification mode for more thorough analysis")


class VerifyAndSaveArgs(ToolArguments):
    code: NonEmptyStr = Field(description="The code to verify and save")
    language: NonEmptyStr = Field(description="Programming language")
    title: NonEmptyStr = Field(description="Title for the code source")
    description: Optional[str] = Field(default=None, description="Description of what the code does")
    notebook_id: Optional[str] = Field(default=None, description="Optional notebook ID to associate the source with")
    context: Optional[str] = Field(default=None, description="Optional context for verification")
    strict_mode: bool = Field(default=False, description="Enable strict verification mode")


class CodeSnippet(ToolArguments):
    id: str = Field(description="Unique identifier for the snippet")
    code: str = Field(description="The code to verify")
    language: str = Field(description="Programming language")
    context: Optional[str] = Field(default=None, description="Optional context")
    strict_mode: Optional[bool] = Field(default=None, description="Strict mode")


class BatchVerifyArgs(ToolArguments):
    snippets: List[CodeSnippet] = Field(description="Array of code snippets to verify")


class AnalyzeCodeArgs(ToolArguments):
    code: NonEmptyStr = Field(description="The code to analyze")
    language: NonEmptyStr = Field(description="Programming language")
    analysis_type: Literal["performance", "security", "readability", "comprehensive"] = Field(
        default="comprehensive",
        description="Type of analysis: performance, security, readability, or comprehensive",
    )


class GetVerifiedSourcesArgs(ToolArguments):
    notebook_id: Optional[str] = Field(default=None, description="Filter by notebook ID")
    language: Optional[str] = Field(default=None, description="Filter by programming language")


# ==================== AGENT COMMUNICATION ====================


class CreateAgentNotebookArgs(ToolArguments):
    agent_name: NonEmptyStr = Field(description='Display name of the coding agent (e.g., "Claude", "Kiro", "Cursor")')
    agent_identifier: NonEmptyStr = Field(
        description='Unique identifier for this agent type (e.g., "claude-3-opus", "kiro-v1")'
    )
    title: Optional[str] = Field(
        default=None, description='Optional custom title for the notebook (defaults to "{agentName} Code")'
    )
    description: Optional[str] = Field(default=None, description="Optional description for the notebook")
    webhook_url: Optional[UrlStr] = Field(default=None, description="Optional webhook URL for receiving follow-up messages")
    webhook_secret: Optional[WebhookSecret] = Field(
        default=None, description="Optional shared secret for webhook authentication (min 16 characters)"
    )
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, description="Optional additional metadata to store with the session"
    )


class VerificationResult(ToolArguments):
    is_valid: bool = Field(description="Whether the code passed critical checks")
    score: float = Field(description="Quality score from 0-100")
    errors: Optional[List[str]] = Field(default=None, description="Critical issues")
    warnings: Optional[List[str]] = Field(default=None, description="Non-critical issues")
    suggestions: Optional[List[str]] = Field(default=None, description="Improvement recommendations")


class SaveCodeWithContextArgs(ToolArguments):
    code: NonEmptyStr = Field(description="The code to save")
    language: NonEmptyStr = Field(description="Programming language (javascript, typescript, python, dart, etc.)")
    title: NonEmptyStr = Field(description="Title for the code source")
    description: Optional[str] = Field(default=None, description="Description of what the code does")
    notebook_id: NonEmptyStr = Field(description="The agent notebook ID to save to (from create_agent_notebook)")
    agent_session_id: Optional[str] = Field(default=None, description="The agent session ID (from create_agent_notebook)")
    conversation_context: Optional[str] = Field(
        default=None, description="The conversation/context that led to this code being created"
    )
    verification: Optional[VerificationResult] = Field(default=None, description="Optional pre-computed verification result")
    strict_mode: bool = Field(default=False, description="Enable strict verification mode if verifying")


class GetFollowupMessagesArgs(ToolArguments):
    agent_session_id: Optional[str] = Field(default=None, description="The agent session ID to check for messages")
    agent_identifier: Optional[str] = Field(
        default=None, description="Alternative: the agent identifier to look up the session"
    )


class CodeUpdate(ToolArguments):
    code: str = Field(description="The updated code")
    description: Optional[str] = Field(default=None, description="Description of what changed")


class RespondToFollowupArgs(ToolArguments):
    message_id: NonEmptyStr = Field(description="The ID of the message being responded to")
    response: NonEmptyStr = Field(description="The response text to send to the user")
    agent_session_id: Optional[str] = Field(default=None, description="The agent session ID")
    code_update: Optional[CodeUpdate] = Field(default=None, description="Optional code update to apply to the source")


class RegisterWebhookArgs(ToolArguments):
    agent_session_id: Optional[str] = Field(default=None, description="The agent session ID to configure")
    agent_identifier: Optional[str] = Field(
        default=None, description="Alternative: the agent identifier to look up the session"
    )
    webhook_url: UrlStr = Field(description="The HTTPS URL to receive webhook requests")
    webhook_secret: WebhookSecret = Field(
        description="Shared secret for HMAC-SHA256 signature verification (min 16 characters)"
    )


# ==================== SOURCES ====================


class SourceIdArgs(ToolArguments):
    source_id: NonEmptyStr = Field(description="The ID of the source")


class SearchSourcesArgs(ToolArguments):
    query: Optional[str] = Field(default=None, description="Text to search for in title and code content")
    language: Optional[str] = Field(default=None, description="Filter by programming language (e.g., typescript, python)")
    notebook_id: Optional[str] = Field(default=None, description="Filter by specific notebook ID")
    limit: int = Field(default=20, description="Maximum results to return (default: 20)")


class UpdateSourceArgs(ToolArguments):
    source_id: NonEmptyStr = Field(description="The ID of the source to update")
    code: Optional[str] = Field(default=None, description="The updated code content")
    title: Optional[str] = Field(default=None, description="New title for the source")
    description: Optional[str] = Field(default=None, description="New description")
    language: Optional[str] = Field(default=None, description="Change the programming language")
    revalidate: bool = Field(default=False, description="Re-run code verification after update")


class ExportSourcesArgs(ToolArguments):
    notebook_id: Optional[str] = Field(default=None, description="Export only from this notebook")
    language: Optional[str] = Field(default=None, description="Export only this language")
    include_verification: bool = Field(default=True, description="Include verification results")
    include_conversations: bool = Field(default=False, description="Include conversation history")


class GetUsageStatsArgs(ToolArguments):
    period: Literal["week", "month", "year", "all"] = Field(
        default="month", description='Time period: "week", "month", "year", or "all"'
    )


TOOLS: List[ProxiedTool] = [
    ProxiedTool(
        "verify_code",
        "Verify code for correctness, security vulnerabilities, and best practices.\n"
        "Returns a verification result with:\n"
        "- isValid: Whether the code passes critical checks\n"
        "- score: Quality score from 0-100\n"
        "- errors: Critical issues that must be fixed\n"
        "- warnings: Non-critical issues to consider\n"
        "- suggestions: Improvement recommendations",
        VerifyCodeArgs,
        _route(method="POST", path="/verify"),
    ),
    ProxiedTool(
        "verify_and_save",
        "Verify code and save it as a source in the app if it passes verification (score >= 60).\n"
        "The code will be stored and can be retrieved later for reference.",
        VerifyAndSaveArgs,
        _route(method="POST", path="/verify-and-save"),
    ),
    ProxiedTool(
        "batch_verify",
        "Verify multiple code snippets at once. Returns individual results and a summary.",
        BatchVerifyArgs,
        _route(method="POST", path="/batch-verify"),
    ),
    ProxiedTool(
        "analyze_code",
        "Perform deep analysis of code with comprehensive suggestions for improvement.\n"
        "Uses strict mode by default for thorough analysis.",
        AnalyzeCodeArgs,
        _route(method="POST", path="/analyze"),
    ),
    ProxiedTool(
        "get_verified_sources",
        "Retrieve previously saved verified code sources.",
        GetVerifiedSourcesArgs,
        _route(method="GET", path="/sources"),
    ),
    ProxiedTool(
        "create_agent_notebook",
        "Create a dedicated notebook for this coding agent. Idempotent: calling it again with the same "
        "agent identifier returns the existing notebook.\n\n"
        "Use it to set up a workspace for verified code, establish a session for two-way communication "
        "with the user, and optionally configure a webhook for follow-up messages.\n\n"
        "Returns:\n"
        "- notebook: The created/existing notebook with ID, title, description\n"
        "- session: The agent session with ID, status, and configuration",
        CreateAgentNotebookArgs,
        _route(method="POST", path="/notebooks"),
    ),
    ProxiedTool(
        "save_code_with_context",
        "Save verified code to the agent's notebook with the conversation context that produced it.\n\n"
        "The source is linked to the agent session so the user can send follow-up messages about it. "
        "Use this instead of verify_and_save when the conversation history should be kept with the code.",
        SaveCodeWithContextArgs,
        _route(method="POST", path="/sources/with-context"),
    ),
    ProxiedTool(
        "get_followup_messages",
        "Poll for pending follow-up messages from the user.\n\n"
        "Returns messages with their ID, content and timestamp, the related source "
        "(title, code, language) and the conversation history.",
        GetFollowupMessagesArgs,
        _route(method="GET", path="/followups"),
    ),
    ProxiedTool(
        "respond_to_followup",
        "Send a response to a user's follow-up message, optionally with a code update for the source.\n\n"
        "The response is displayed to the user in the app's chat interface.",
        RespondToFollowupArgs,
        _route(method="POST", path="/followups/{messageId}/respond"),
    ),
    ProxiedTool(
        "register_webhook",
        "Register a webhook endpoint to receive follow-up messages in real-time instead of polling "
        "with get_followup_messages.\n\n"
        "The webhook receives POST requests of type 'followup_message' with the source, the user's "
        "message and the conversation history. Requests are signed with HMAC-SHA256 using the provided secret.",
        RegisterWebhookArgs,
        _route(method="POST", path="/webhook/register"),
    ),
    ProxiedTool(
        "get_websocket_info",
        "Get WebSocket connection information for real-time bidirectional communication.\n\n"
        "Returns the WebSocket URL, the authentication method and the message format for sending responses.",
        NoArguments,
        _route(method="GET", path="/websocket/info"),
    ),
    ProxiedTool(
        "get_quota",
        "Get your current MCP usage quota and limits.\n\n"
        "Returns source, token and daily API call limits with usage and remaining counts, "
        "plus isPremium and isMcpEnabled. Check it before saving sources or making API calls.",
        NoArguments,
        _route(method="GET", path="/quota"),
    ),
    ProxiedTool(
        "list_notebooks",
        "List all your notebooks with their source counts.\n\n"
        "Returns id, title, description, icon, isAgentNotebook, sourceCount, createdAt and updatedAt "
        "for each notebook.",
        NoArguments,
        _route(method="GET", path="/notebooks/list"),
    ),
    ProxiedTool(
        "get_source",
        "Get a specific code source by ID, including its full code, language, verification result, "
        "the agent that created it and the original conversation context.",
        SourceIdArgs,
        _route(method="GET", path="/sources/{sourceId}"),
    ),
    ProxiedTool(
        "search_sources",
        "Search across all your code sources by text, language or notebook.\n\n"
        "Returns matching sources with id, title, notebook, language, isVerified, agentName "
        "and a contentPreview of the first 200 characters of code.",
        SearchSourcesArgs,
        _route(method="GET", path="/sources/search"),
    ),
    ProxiedTool(
        "update_source",
        "Update an existing code source without using quota. Set revalidate to re-run verification "
        "on the updated code.",
        UpdateSourceArgs,
        _route(method="PUT", path="/sources/{sourceId}"),
    ),
    ProxiedTool(
        "delete_source",
        "Delete a code source permanently. Frees one slot of your source quota and deletes any "
        "associated conversation history.",
        SourceIdArgs,
        _route(method="DELETE", path="/sources/{sourceId}"),
    ),
    ProxiedTool(
        "export_sources",
        "Export your code sources as JSON for backup or transfer, optionally filtered by notebook "
        "or language.",
        ExportSourcesArgs,
        _route(method="GET", path="/sources/export"),
    ),
    ProxiedTool(
        "get_usage_stats",
        "Get detailed usage statistics: sources by language, verification score distribution, "
        "sources over time, most active notebooks and agent activity.",
        GetUsageStatsArgs,
        _route(method="GET", path="/stats"),
    ),
]
