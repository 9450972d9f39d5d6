"""GitHub route group. The backend holds the user's GitHub credentials."""

from functools import partial
from typing import List, Literal, Optional

from pydantic import Field

from ..core.tools.models import Route, RouteGroup
from .base import NoArguments, NonEmptyStr, ProxiedTool, ToolArguments

_route = partial(Route, group=RouteGroup.GITHUB)


class ListReposArgs(ToolArguments):
    type: Literal["all", "owner", "member"] = Field(default="all", description="Filter by type: all, owner, member")
    sort: Literal["created", "updated", "pushed", "full_name"] = Field(
        default="updated", description="Sort by: created, updated, pushed, full_name"
    )
    per_page: int = Field(default=30, ge=1, le=100, description="Results per page (max 100)")
    page: int = Field(default=1, ge=1, description="Page number")


class RepoArgs(ToolArguments):
    owner: NonEmptyStr = Field(description="Repository owner (username or org)")
    repo: NonEmptyStr = Field(description="Repository name")


class RepoTreeArgs(RepoArgs):
    branch: Optional[str] = Field(default=None, description="Branch name (defaults to default branch)")


class GetFileArgs(RepoArgs):
    path: NonEmptyStr = Field(description='File path from repo root (e.g., "src/index.ts")')
    branch: Optional[str] = Field(default=None, description="Branch name (optional)")


class SearchCodeArgs(ToolArguments):
    query: NonEmptyStr = Field(description="Search query")
    repo: Optional[str] = Field(default=None, description="Limit to repo (owner/repo format)")
    language: Optional[str] = Field(default=None, description="Filter by language")
    path: Optional[str] = Field(default=None, description="Filter by path")
    per_page: int = Field(default=20, ge=1, description="Results per page")


class CreateIssueArgs(RepoArgs):
    title: NonEmptyStr = Field(description="Issue title")
    body: Optional[str] = Field(default=None, description="Issue body (markdown)")
    labels: Optional[List[str]] = Field(default=None, description="Labels to apply")


class AddCommentArgs(RepoArgs):
    issue_number: int = Field(description="Issue or PR number")
    body: NonEmptyStr = Field(description="Comment body (markdown)")


class AddAsSourceArgs(RepoArgs):
    notebook_id: NonEmptyStr = Field(description="Notebook ID to add source to")
    path: NonEmptyStr = Field(description="File path in repo")
    branch: Optional[str] = Field(default=None, description="Branch name (optional)")


class AnalyzeRepoArgs(RepoArgs):
    focus: Optional[str] = Field(
        default=None, description='Optional focus area (e.g., "security", "performance", "architecture")'
    )
    include_files: Optional[List[str]] = Field(default=None, description="Specific files to include in analysis")


TOOLS: List[ProxiedTool] = [
    ProxiedTool(
        "github_status",
        "Check if GitHub is connected for the current user.\n\n"
        "Returns connected, username and the granted scopes. Use this before calling other GitHub tools "
        "to verify access.",
        NoArguments,
        _route(method="GET", path="/status"),
    ),
    ProxiedTool(
        "github_list_repos",
        "List GitHub repositories accessible to the user.\n\n"
        "Returns fullName (owner/repo), name, owner, description, defaultBranch, language, isPrivate, "
        "isFork, starsCount and forksCount for each repository.",
        ListReposArgs,
        _route(method="GET", path="/repos"),
    ),
    ProxiedTool(
        "github_get_repo_tree",
        "Get the file tree structure of a GitHub repository.\n\n"
        "Returns every file and directory with its path, type ('blob' or 'tree'), sha and size. "
        "Use this to explore a repository before fetching specific files.",
        RepoTreeArgs,
        _route(method="GET", path="/repos/{owner}/{repo}/tree"),
    ),
    ProxiedTool(
        "github_get_file",
        "Get the contents of a file from a GitHub repository.\n\n"
        "Returns name, path, sha, size, the decoded content and its encoding.",
        GetFileArgs,
        _route(method="GET", path="/repos/{owner}/{repo}/contents/{path:path}"),
    ),
    ProxiedTool(
        "github_search_code",
        "Search for code across GitHub repositories, optionally limited to a repo (owner/repo), "
        "a language or a path.\n\n"
        "Returns matching files with name, path, sha, repository, htmlUrl and textMatches.",
        SearchCodeArgs,
        _route(method="GET", path="/search", rename={"query": "q"}),
    ),
    ProxiedTool(
        "github_get_readme",
        "Get the README file from a GitHub repository as markdown text.",
        RepoArgs,
        _route(method="GET", path="/repos/{owner}/{repo}/readme"),
    ),
    ProxiedTool(
        "github_create_issue",
        "Create a new issue in a GitHub repository.\n\n"
        "Returns the issue number and its htmlUrl. Use this to report bugs, request features, or track tasks.",
        CreateIssueArgs,
        _route(method="POST", path="/repos/{owner}/{repo}/issues"),
    ),
    ProxiedTool(
        "github_add_comment",
        "Add a comment to an issue or pull request. Returns the comment id and its htmlUrl.",
        AddCommentArgs,
        _route(method="POST", path="/repos/{owner}/{repo}/issues/{issueNumber}/comments"),
    ),
    ProxiedTool(
        "github_add_as_source",
        "Add a GitHub file as a source to a notebook so the app's AI can analyze and discuss it.\n\n"
        "Returns the created source with its ID.",
        AddAsSourceArgs,
        _route(method="POST", path="/add-source"),
    ),
    ProxiedTool(
        "github_analyze_repo",
        "Request AI analysis of a GitHub repository.\n\n"
        "The analysis covers repository structure, key files, code patterns and architecture, "
        "the technology stack and potential improvements.",
        AnalyzeRepoArgs,
        _route(method="POST", path="/analyze"),
    ),
]
