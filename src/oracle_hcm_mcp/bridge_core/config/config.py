"""Environment-sourced configuration for the Oracle HCM REST API."""

import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MissingConfigError
from ..logger import get_logger

logger = get_logger(__name__)

DEFAULT_API_VERSION = "11.13.18.05"
DEFAULT_FRAMEWORK_VERSION = "9"
DEFAULT_USERNAME = "WBC_HR_AGENT"
DEFAULT_TIMEOUT_SECONDS = 30.0

_QUOTE_CHARS = "\"'"


def _strip_quotes(value: str) -> str:
    """Remove quoting artifacts left around a value by shells and .env files."""
    return value.strip().strip(_QUOTE_CHARS)


class HcmConfig(BaseModel):
    """
    Immutable connection settings for the Oracle HCM REST API.

    Resolved once at startup via ``from_env`` and handed to the HTTP client by
    injection. The password is excluded from ``repr`` so it never lands in logs.

    Attributes:
        base_url: Root URL of the HCM instance, without a trailing slash.
        password: Password for HTTP Basic authentication.
        username: Principal for HTTP Basic authentication.
        api_version: REST resource version segment, e.g. "11.13.18.05".
        framework_version: Value for the REST-Framework-Version header.
        timeout_seconds: Default per-request timeout.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    password: str = Field(repr=False)
    username: str = DEFAULT_USERNAME
    api_version: str = DEFAULT_API_VERSION
    framework_version: str = DEFAULT_FRAMEWORK_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HcmConfig":
        """Resolve the configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A frozen HcmConfig.

        Raises:
            MissingConfigError: If HCM_BASE_URL or HCM_PASSWORD is absent or empty,
                or HCM_TIMEOUT_SECONDS is not a positive number.
        """
        env = os.environ if environ is None else environ

        base_url = _required(env, "HCM_BASE_URL").rstrip("/")
        password = _required(env, "HCM_PASSWORD")

        raw_timeout = _optional(env, "HCM_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError:
            raise MissingConfigError("HCM_TIMEOUT_SECONDS", f"must be a number, got {raw_timeout!r}")
        if timeout_seconds <= 0:
            raise MissingConfigError("HCM_TIMEOUT_SECONDS", "must be greater than zero")

        config = cls(
            base_url=base_url,
            password=password,
            username=_optional(env, "HCM_USERNAME", DEFAULT_USERNAME),
            api_version=_optional(env, "HCM_API_VERSION", DEFAULT_API_VERSION),
            framework_version=_optional(env, "REST_FRAMEWORK_VERSION", DEFAULT_FRAMEWORK_VERSION),
            timeout_seconds=timeout_seconds,
        )
        logger.debug("Resolved HCM configuration: %s", config.summary())
        return config

    @property
    def resource_root(self) -> str:
        """Absolute URL prefix every resource path is appended to."""
        return f"{self.base_url}/hcmRestApi/resources/{self.api_version}"

    def summary(self) -> Dict[str, Any]:
        """Configuration values safe for startup logging (no secrets)."""
        return {
            "base_url": self.base_url,
            "username": self.username,
            "api_version": self.api_version,
            "framework_version": self.framework_version,
            "timeout_seconds": self.timeout_seconds,
        }


def _required(env: Mapping[str, str], key: str) -> str:
    raw = env.get(key)
    if raw is None:
        logger.error("Required configuration %s is not set.", key)
        raise MissingConfigError(key)
    value = _strip_quotes(raw)
    if not value:
        logger.error("Required configuration %s is empty.", key)
        raise MissingConfigError(key, "must not be empty")
    return value


def _optional(env: Mapping[str, str], key: str, default: str) -> str:
    raw = env.get(key)
    if raw is None:
        return default
    return _strip_quotes(raw) or default
