"""HTTP helpers for ZapScan."""

from .client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HTTPClient, HTTPResponse

__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "HTTPClient",
    "HTTPResponse",
]
