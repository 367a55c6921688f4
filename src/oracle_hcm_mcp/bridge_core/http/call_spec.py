"""Data model describing a single outbound REST call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RemoteCallSpec:
    """Everything the request builder needs for one call against the HCM API.

    Attributes:
        path: Resource path (with query string) appended to the versioned resource root.
        method: HTTP method; only GET and POST are accepted by the client.
        body: Raw request body, sent verbatim on POST.
        send_framework_header: Attach the REST-Framework-Version header. Some
            resources refuse to answer when it is present.
        timeout_override: Timeout in seconds replacing the client default for this call.
    """

    path: str
    method: str = "GET"
    body: Optional[bytes] = None
    send_framework_header: bool = True
    timeout_override: Optional[float] = None
