"""Planning route group: plans, tasks, requirements and design notes."""

from functools import partial
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ..core.tools.models import Route, RouteGroup
from .base import NonEmptyStr, ProxiedTool, ToolArguments

_route = partial(Route, group=RouteGroup.PLANNING)

PlanStatus = Literal["draft", "active", "completed", "archived"]
TaskStatus = Literal["not_started", "in_progress", "paused", "blocked", "completed"]


class ListPlansArgs(ToolArguments):
    status: Optional[PlanStatus] = Field(default=None, description="Filter by status: draft, active, completed, archived")
    include_archived: bool = Field(default=False, description="Include archived plans")
    limit: int = Field(default=50, description="Maximum results to return (default: 50)")
    offset: int = Field(default=0, ge=0, description="Pagination offset (default: 0)")


class GetPlanArgs(ToolArguments):
    plan_id: NonEmptyStr = Field(description="The ID of the plan to retrieve")
    include_relations: bool = Field(default=True, description="Include requirements, design notes, and tasks (default: true)")


class CreatePlanArgs(ToolArguments):
    title: NonEmptyStr = Field(description="Plan title (required)")
    description: Optional[str] = Field(default=None, description="Plan description")
    is_private: bool = Field(default=True, description="Whether the plan is private (default: true)")


class PlanArgs(ToolArguments):
    plan_id: NonEmptyStr = Field(description="The plan ID (required)")


class TaskArgs(PlanArgs):
    task_id: NonEmptyStr = Field(description="The task ID (required)")


class CreateTaskArgs(PlanArgs):
    title: NonEmptyStr = Field(description="Task title (required)")
    description: Optional[str] = Field(default=None, description="Task description")
    parent_task_id: Optional[str] = Field(default=None, description="Parent task ID for creating sub-tasks")
    requirement_ids: Optional[List[str]] = Field(default=None, description="Array of requirement IDs this task implements")
    priority: Literal["low", "medium", "high", "critical"] = Field(
        default="medium", description="Task priority: low, medium, high, critical"
    )


class UpdateTaskStatusArgs(TaskArgs):
    status: TaskStatus = Field(description="New status: not_started, in_progress, paused, blocked, completed")
    reason: Optional[str] = Field(default=None, description="Reason for status change (required for blocked status)")


class AddTaskOutputArgs(TaskArgs):
    type: Literal["comment", "code", "file", "completion"] = Field(
        description="Output type: comment, code, file, completion"
    )
    content: NonEmptyStr = Field(description="Output content (required)")
    agent_name: Optional[str] = Field(default=None, description="Name of the agent adding the output")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="Additional metadata for the output")


class CompleteTaskArgs(TaskArgs):
    summary: Optional[str] = Field(default=None, description="Completion summary describing what was done")


class CreateRequirementArgs(PlanArgs):
    title: NonEmptyStr = Field(description="Requirement title (required)")
    description: Optional[str] = Field(default=None, description="Detailed description or user story")
    ears_pattern: Optional[Literal["ubiquitous", "event", "state", "unwanted", "optional", "complex"]] = Field(
        default=None, description="EARS pattern type"
    )
    acceptance_criteria: Optional[List[str]] = Field(
        default=None, description="Array of acceptance criteria for this requirement"
    )


class CreateDesignNoteArgs(PlanArgs):
    content: NonEmptyStr = Field(description="Design note content (required)")
    requirement_ids: Optional[List[str]] = Field(
        default=None, description="Array of requirement IDs this design note relates to"
    )


class GetDesignNotesArgs(PlanArgs):
    filter_ui_designs: bool = Field(default=False, description="If true, only return UI design notes (containing HTML code)")


TOOLS: List[ProxiedTool] = [
    ProxiedTool(
        "list_plans",
        "List all plans accessible to the authenticated user.\n\n"
        "Returns id, title, description, status, requirement/task counts and timestamps for each plan. "
        "Archived plans are excluded unless includeArchived is set.",
        ListPlansArgs,
        _route(method="GET", path="/"),
    ),
    ProxiedTool(
        "get_plan",
        "Get a specific plan with full details, including its requirements, design notes and tasks "
        "unless includeRelations is false.",
        GetPlanArgs,
        _route(method="GET", path="/{planId}"),
    ),
    ProxiedTool(
        "create_plan",
        "Create a new plan to hold requirements, design notes and tasks. Returns the created plan with its ID.",
        CreatePlanArgs,
        _route(method="POST", path="/"),
    ),
    ProxiedTool(
        "create_task",
        "Create a new task in a plan, optionally as a sub-task and linked to requirements.\n\n"
        "Returns the created task with its ID.",
        CreateTaskArgs,
        _route(method="POST", path="/{planId}/tasks"),
    ),
    ProxiedTool(
        "update_task_status",
        "Update a task's status. A reason is expected when blocking a task.\n\n"
        "Status values: not_started, in_progress, paused, blocked, completed.",
        UpdateTaskStatusArgs,
        _route(method="POST", path="/{planId}/tasks/{taskId}/status"),
    ),
    ProxiedTool(
        "add_task_output",
        "Add an output to a task (comment, code, file, or completion note).",
        AddTaskOutputArgs,
        _route(method="POST", path="/{planId}/tasks/{taskId}/output"),
    ),
    ProxiedTool(
        "complete_task",
        "Complete a task with an optional summary. Marks it completed and records a completion output.",
        CompleteTaskArgs,
        _route(method="POST", path="/{planId}/tasks/{taskId}/complete"),
    ),
    ProxiedTool(
        "create_requirement",
        "Create a new requirement in a plan following EARS patterns.\n\n"
        "- ubiquitous: THE <system> SHALL <response>\n"
        "- event: WHEN <trigger>, THE <system> SHALL <response>\n"
        "- state: WHILE <condition>, THE <system> SHALL <response>\n"
        "- unwanted: IF <condition>, THEN THE <system> SHALL <response>\n"
        "- optional: WHERE <option>, THE <system> SHALL <response>\n"
        "- complex: Combination of above patterns",
        CreateRequirementArgs,
        _route(method="POST", path="/{planId}/requirements"),
    ),
    ProxiedTool(
        "create_design_note",
        "Create a design note in a plan to document architectural decisions, implementation details "
        "and trade-offs. Returns the created design note with its ID.",
        CreateDesignNoteArgs,
        _route(method="POST", path="/{planId}/design-notes"),
    ),
    ProxiedTool(
        "get_design_notes",
        "Get all design notes from a plan, including UI designs.\n\n"
        "Each note has id, content (which may contain HTML/CSS code for UI designs), requirementIds, "
        "createdAt and updatedAt.",
        GetDesignNotesArgs,
        _route(method="GET", path="/{planId}/design-notes"),
    ),
]
