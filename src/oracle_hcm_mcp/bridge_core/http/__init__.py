"""HTTP layer: request builder, RemoteCallSpec and tracing hooks."""

from .call_spec import RemoteCallSpec
from .client import HcmHttpClient, ACTION_CONTENT_TYPE, FRAMEWORK_VERSION_HEADER, SUPPORTED_METHODS
from .tracing import sanitize_headers

__all__ = [
    "RemoteCallSpec",
    "HcmHttpClient",
    "ACTION_CONTENT_TYPE",
    "FRAMEWORK_VERSION_HEADER",
    "SUPPORTED_METHODS",
    "sanitize_headers",
]
