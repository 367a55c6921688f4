"""Assemble configuration, HTTP client and tool table into a callable bridge."""

from datetime import date
from types import TracebackType
from typing import Any, Callable, Dict, Mapping, Optional, Type

import httpx

from ..bridge_core.config import HcmConfig
from ..bridge_core.http import HcmHttpClient
from ..bridge_core.logger import get_logger
from ..bridge_core.tools import ToolDispatcher, ToolRegistry
from ..mcp_wrapper.registry import McpToolRegistry
from .tools import OracleHcmTools

logger = get_logger(__name__)


class OracleHcmBridge:
    """
    The Oracle HCM tool bridge.

    Construction takes an already resolved HcmConfig, so a bridge that exists
    is always callable; ``from_env`` performs the resolution and raises
    ``MissingConfigError`` before anything is registered.
    """

    def __init__(
        self,
        config: HcmConfig,
        registry: Optional[ToolRegistry] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the bridge.

        Args:
            config: Resolved HCM configuration.
            registry: Registry to publish the tools into. Defaults to an McpToolRegistry.
            transport: Optional httpx transport for the shared client.
            today: Source of the current local date for balance projections.
        """
        self.config = config
        self.client = HcmHttpClient(config, transport=transport)
        self.tools = OracleHcmTools(self.client, today=today)
        self.registry = registry if registry is not None else McpToolRegistry()
        for func in self.tools.functions():
            self.registry.register(func)
        self.dispatcher = ToolDispatcher(registry=self.registry)
        logger.info("Oracle HCM bridge ready with %d tools: %s", len(self.registry.tools), self.config.summary())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs: Any) -> "OracleHcmBridge":
        """Resolve configuration from the environment and build the bridge.

        Raises:
            MissingConfigError: If a required variable is missing.
        """
        return cls(HcmConfig.from_env(environ), **kwargs)

    async def call_tool(self, name: str, arguments: Any = None) -> Dict[str, Any]:
        """Invoke a tool by name and return its structured result."""
        return await self.dispatcher.call(name, arguments)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "OracleHcmBridge":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.aclose()
