"""Local context tools: the current time and a proxied web search."""

import calendar
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Literal

from pydantic import Field

from ..core.exceptions import BackendError
from ..core.logger import get_logger
from ..core.tools import ToolContext
from ..core.tools.models import RouteGroup

logger = get_logger(__name__)

TIME_NOTE = "Use web_search tool to verify latest package versions and best practices"
SEARCH_NOTE = "Results are from web search. Verify information from official sources when possible."
SEARCH_SUGGESTION = "Try a different query or check if the search service is available"


def iso_utc(moment: datetime) -> str:
    """ISO-8601 in UTC with milliseconds and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _long_date(moment: datetime) -> str:
    # "Monday, October 19, 2026"; strftime would zero-pad the day
    return f"{moment:%A, %B} {moment.day}, {moment.year}"


def _utc_offset(moment: datetime) -> str:
    offset = moment.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def build_time_payload(now: datetime, format: str = "full") -> Dict[str, Any]:
    """Describe ``now`` the way ``get_current_time`` reports it.

    Args:
        now: A timezone-aware local time.
        format: "short" for date, time and UTC only; anything else for the full report.
    """
    if format == "short":
        return {"date": _long_date(now), "time": f"{now:%I:%M %p}", "utc": iso_utc(now)}

    quarter = (now.month - 1) // 3 + 1
    days_in_month = calendar.monthrange(now.year, now.month)[1]
    return {
        "localDate": _long_date(now),
        "localTime": f"{now:%I:%M:%S %p}",
        "utcTime": iso_utc(now),
        "timezone": _utc_offset(now),
        "weekNumber": now.isocalendar()[1],
        "quarter": quarter,
        "quarterLabel": f"Q{quarter} {now.year}",
        "daysUntilEndOfMonth": days_in_month - now.day,
        "daysUntilEndOfYear": (now.date().replace(month=12, day=31) - now.date()).days,
        "timestamp": int(now.timestamp() * 1000),
        "note": TIME_NOTE,
    }


async def get_current_time(
    format: Annotated[
        Literal["full", "short"],
        Field(description='Output format: "full" for comprehensive info, "short" for brief'),
    ] = "full",
) -> Dict[str, Any]:
    """Get current date and time information to reduce AI hallucinations.

    Returns the current date and time (local and UTC), the timezone, the ISO week number,
    the quarter and the days left until the end of the month and year.

    Use this to provide accurate timeline estimates, avoid hallucinating dates or versions,
    and plan sprints and deadlines.
    """
    return build_time_payload(datetime.now().astimezone(), format)


def _reshape_results(organic: List[Dict[str, Any]], num: int) -> List[Dict[str, Any]]:
    return [
        {
            "title": item.get("title"),
            "link": item.get("link"),
            "snippet": item.get("snippet"),
            "date": item.get("date") or None,
        }
        for item in organic[:num]
    ]


async def web_search(
    ctx: ToolContext,
    query: Annotated[str, Field(min_length=1, description="Search query (required)")],
    num: Annotated[int, Field(ge=1, le=10, description="Number of results to return (default: 5, max: 10)")] = 5,
) -> Dict[str, Any]:
    """Search the web for latest information to reduce hallucinations.

    Use this to find the latest package versions, current best practices and documentation,
    technology comparisons and up-to-date guides. Returns results with title, link, snippet
    and date (if available).

    IMPORTANT: Always use this tool when the user asks about "latest" or "current" versions,
    when recommending dependencies, or for anything that could be outdated.
    """
    try:
        data = await ctx.backend.request(
            RouteGroup.SEARCH,
            "POST",
            "/proxy",
            json={"query": query, "type": "search", "num": num},
            timeout=ctx.settings.search_timeout,
        )
    except BackendError as exc:
        logger.warning(f"Web search failed: {exc.message}")
        return {
            "success": False,
            "query": query,
            "error": exc.message or "Web search failed",
            "suggestion": SEARCH_SUGGESTION,
        }

    organic = data.get("organic") if isinstance(data, dict) else None
    # Entries that are not objects carry no usable fields
    results = [item for item in organic if isinstance(item, dict)] if isinstance(organic, list) else []
    return {
        "success": True,
        "query": query,
        "resultsCount": len(results),
        "results": _reshape_results(results, num),
        "searchedAt": iso_utc(datetime.now(timezone.utc)),
        "note": SEARCH_NOTE,
    }


TOOLS = [get_current_time, web_search]
