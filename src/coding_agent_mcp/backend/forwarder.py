"""Forward validated tool calls to the HTTP backend."""

from types import TracebackType
from typing import Any, Dict, Optional, Type

import httpx

from ..core.config import Settings
from ..core.exceptions import BackendError
from ..core.logger import get_logger
from ..core.tools.models import RouteGroup, ToolResponseEnvelope, ValidatedArguments

logger = get_logger(__name__)

__all__ = ["BackendForwarder"]


class BackendForwarder:
    """Issues exactly one backend call per proxied tool invocation.

    All route groups share one ``httpx.AsyncClient``: same host, same auth header,
    same timeout. No retries are performed here.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """Initialize the forwarder.

        Args:
            settings: Backend host, credential and timeouts.
            transport: Optional transport override, e.g. ``httpx.MockTransport`` in tests.
        """
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.backend_url,
            headers=settings.auth_headers(),
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BackendForwarder":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug("Backend client closed.")

    async def forward(self, validated: ValidatedArguments) -> ToolResponseEnvelope:
        """Send a proxied tool call to its route and wrap the outcome.

        Args:
            validated: Arguments of a tool that carries a ``Route``.

        Returns:
            A success envelope with the backend payload passed through unchanged,
            or an error envelope ``{success: false, error, details}``.
        """
        tool = validated.tool
        if tool.route is None:
            raise ValueError(f"Tool '{tool.name}' has no backend route.")

        backend_request = tool.route.build_request(validated.wire_payload())
        logger.info(f"Forwarding '{tool.name}' to {backend_request.method} {backend_request.url}")
        try:
            payload = await self.request(
                backend_request.group,
                backend_request.method,
                backend_request.path,
                params=backend_request.params,
                json=backend_request.json,
            )
        except BackendError as exc:
            logger.warning(f"Backend call for '{tool.name}' failed: {exc.message}")
            return ToolResponseEnvelope.failure(exc.message, exc.details)
        return ToolResponseEnvelope.success(payload)

    async def request(
        self,
        group: RouteGroup,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Perform one HTTP call against a route group.

        Args:
            group: Route group whose prefix the path is relative to.
            method: HTTP method.
            path: Path below the group prefix.
            params: Query parameters.
            json: JSON body.
            timeout: Overrides the default ceiling for this call.

        Returns:
            The decoded response body.

        Raises:
            BackendError: On a non-2xx status, a timeout or any transport error.
        """
        url = f"{group.value}{path}"
        kwargs: Dict[str, Any] = {"params": params, "json": json}
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            details = _decode_body(exc.response)
            message = _error_field(details) or f"Request failed with status code {exc.response.status_code}"
            raise BackendError(message, status_code=exc.response.status_code, details=details) from exc
        except httpx.TimeoutException as exc:
            ceiling = timeout if timeout is not None else self.settings.timeout
            raise BackendError(f"Backend request timed out after {ceiling:g}s") from exc
        except httpx.HTTPError as exc:
            raise BackendError(str(exc) or "Unknown error") from exc

        logger.debug(f"{method} {url} -> {response.status_code}")
        return _decode_body(response)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_field(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return None
