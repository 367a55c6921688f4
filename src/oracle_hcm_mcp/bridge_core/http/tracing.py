"""Request tracing for outbound HCM calls, attached to httpx as event hooks."""

import time
from typing import Dict, Mapping

import httpx

from ..logger import get_logger

trace_logger = get_logger("http.trace")

SPAN_NAME = "hcm-api-request"
REDACTED = "[REDACTED]"
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
    }
)

_START_KEY = "hcm_trace_start"


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy headers with credential-bearing values replaced by a placeholder.

    Args:
        headers: Request or response headers.

    Returns:
        A plain dict safe to log.
    """
    return {name: REDACTED if name.lower() in SENSITIVE_HEADERS else value for name, value in headers.items()}


def _request_body(request: httpx.Request) -> str:
    try:
        content = request.content
    except httpx.RequestNotRead:
        return "<streaming body>"
    if not content:
        return ""
    return content.decode("utf-8", errors="replace")


async def trace_request(request: httpx.Request) -> None:
    """Open the span for an outbound request.

    Called by httpx after authentication has been applied, so the
    Authorization header is present here and must be redacted.
    """
    request.extensions[_START_KEY] = time.perf_counter()
    trace_logger.debug(
        "%s start method=%s url=%s headers=%s body=%s",
        SPAN_NAME,
        request.method,
        request.url,
        sanitize_headers(request.headers),
        _request_body(request),
    )


async def trace_response(response: httpx.Response) -> None:
    """Close the span with the response status and elapsed time."""
    request = response.request
    started = request.extensions.get(_START_KEY)
    elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else -1.0
    trace_logger.debug(
        "%s end method=%s url=%s status=%s elapsed_ms=%.1f",
        SPAN_NAME,
        request.method,
        request.url,
        response.status_code,
        elapsed_ms,
    )
