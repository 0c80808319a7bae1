"""
Network module: the HttpClient used for every upstream request.
"""

from login_scraper.network.client import (
    FixedCookieSession,
    HttpClient,
    HttpResponse,
    build_session,
    format_raw_headers,
)

__all__ = [
    "FixedCookieSession",
    "HttpClient",
    "HttpResponse",
    "build_session",
    "format_raw_headers",
]
