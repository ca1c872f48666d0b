"""Tools package for ZapScan."""

from zapscan.tools.http import HTTPClient, HTTPResponse

__all__ = ["HTTPClient", "HTTPResponse"]
