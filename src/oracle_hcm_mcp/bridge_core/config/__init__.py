"""Configuration resolution."""

from .config import (
    HcmConfig,
    DEFAULT_API_VERSION,
    DEFAULT_FRAMEWORK_VERSION,
    DEFAULT_USERNAME,
    DEFAULT_TIMEOUT_SECONDS,
)

__all__ = [
    "HcmConfig",
    "DEFAULT_API_VERSION",
    "DEFAULT_FRAMEWORK_VERSION",
    "DEFAULT_USERNAME",
    "DEFAULT_TIMEOUT_SECONDS",
]
