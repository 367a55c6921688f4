"""Shared, authenticated HTTP client for the Oracle HCM REST API."""

from types import TracebackType
from typing import Any, Optional, Type

import httpx

from ..config import HcmConfig
from ..exceptions import HttpError, InternalError, InvalidParamsError
from ..logger import get_logger
from .call_spec import RemoteCallSpec
from .tracing import trace_request, trace_response

logger = get_logger(__name__)

ACTION_CONTENT_TYPE = "application/vnd.oracle.adf.action+json"
FRAMEWORK_VERSION_HEADER = "REST-Framework-Version"
SUPPORTED_METHODS = ("GET", "POST")


class HcmHttpClient:
    """
    Connection-pooled client that executes RemoteCallSpecs against HCM.

    One instance owns one ``httpx.AsyncClient``; every tool call of a bridge
    goes through it. Basic credentials and the default timeout come from the
    injected HcmConfig. The client holds no per-call state, so concurrent
    calls are safe.
    """

    def __init__(self, config: HcmConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """Initialize the client.

        Args:
            config: Resolved HCM configuration.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._config = config
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(config.username, config.password),
            timeout=httpx.Timeout(config.timeout_seconds),
            event_hooks={"request": [trace_request], "response": [trace_response]},
            transport=transport,
        )

    @property
    def config(self) -> HcmConfig:
        return self._config

    async def __aenter__(self) -> "HcmHttpClient":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the pooled connections."""
        await self._client.aclose()
        logger.debug("HCM HTTP client closed.")

    def build_url(self, path: str) -> str:
        """Join a resource path onto the versioned resource root."""
        return f"{self._config.resource_root}{path}"

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[bytes] = None,
        send_framework_header: bool = True,
        timeout_override: Optional[float] = None,
    ) -> Any:
        """Shorthand for ``call`` that builds the RemoteCallSpec from arguments."""
        return await self.call(
            RemoteCallSpec(
                path=path,
                method=method,
                body=body,
                send_framework_header=send_framework_header,
                timeout_override=timeout_override,
            )
        )

    async def call(self, spec: RemoteCallSpec) -> Any:
        """Execute one authenticated call and decode its JSON payload.

        Args:
            spec: Description of the call.

        Returns:
            The decoded JSON document.

        Raises:
            InvalidParamsError: If the method is neither GET nor POST.
            HttpError: If the remote API cannot be reached.
            InternalError: On a non-2xx status, or a 2xx body that cannot be read or is not valid JSON.
        """
        method = spec.method.upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidParamsError("Only GET and POST methods are supported")

        url = self.build_url(spec.path)
        logger.info("HCM API request: %s %s", method, url)

        headers = {}
        content: Optional[bytes] = None
        if spec.send_framework_header:
            headers[FRAMEWORK_VERSION_HEADER] = self._config.framework_version
        if method == "POST":
            headers["Content-Type"] = ACTION_CONTENT_TYPE
            content = spec.body or b""

        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if spec.timeout_override is not None:
            timeout = httpx.Timeout(spec.timeout_override)

        request = self._client.build_request(method, url, content=content, headers=headers, timeout=timeout)

        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error("HCM API request %s %s failed: %s", method, url, e)
            raise HttpError(f"{type(e).__name__}: {e}") from e

        try:
            logger.info("HCM API response: %s %s - Status: %s", method, url, response.status_code)

            if not response.is_success:
                status_line = f"{response.status_code} {response.reason_phrase}".strip()
                try:
                    await response.aread()
                    error_text = response.text
                except httpx.HTTPError as e:
                    error_text = f"Unable to read error response body: {e}"
                logger.error("HCM API request failed with status %s: %s", status_line, error_text)
                raise InternalError(f"HTTP {status_line}: {error_text}")

            try:
                await response.aread()
            except httpx.HTTPError as e:
                logger.error("HCM API response body for %s %s could not be read: %s", method, url, e)
                raise InternalError(f"JSON parsing failed: {type(e).__name__}: {e}") from e

            try:
                payload = response.json()
            except ValueError as e:
                logger.error("HCM API failed to parse successful response as JSON: %s", e)
                raise InternalError(f"JSON parsing failed: {e}") from e
        finally:
            await response.aclose()

        logger.debug("HCM API response (JSON): %s", payload)
        return payload
