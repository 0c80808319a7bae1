"""
login_scraper
=============
Python package that logs in to a CSRF-protected web application, fetches a
session-protected page and returns its HTML table rows as JSON.

Package structure
-----------------
login_scraper/
├── __init__.py       – package init and public API
├── __main__.py       – ``python -m login_scraper``
├── config.py         – constants and the ``.env`` settings loader
├── errors.py         – exception hierarchy
├── logging_setup.py  – colorlog console / file logging
├── pipeline.py       – ScrapePipeline (fetch → login → fetch → parse)
├── server.py         – POST-only HTTP endpoint
├── cli.py            – argparse CLI
├── network/          – HttpClient and HttpResponse
├── auth/             – CSRF token, Set-Cookie parsing, form login
└── extract/          – table row extraction

Quick start
-----------
    from login_scraper import HttpClient, ScrapePipeline, load_settings

    settings = load_settings(".env")
    result = ScrapePipeline(settings, HttpClient()).handle("POST")
    print(result.body)
"""

from .config   import Settings, Credentials, EndpointConfig, load_settings
from .errors   import (
    ScraperError,
    ConfigurationError,
    HttpTransportError,
    MethodNotAllowed,
    CsrfTokenMissing,
    AuthenticationFailed,
)
from .network  import HttpClient, HttpResponse
from .auth     import extract_csrf_token, extract_cookies, login
from .extract  import TableRow, parse_table, rows_to_json
from .pipeline import ScrapePipeline, ScrapeResult

__all__ = [
    "Settings",
    "Credentials",
    "EndpointConfig",
    "load_settings",
    "ScraperError",
    "ConfigurationError",
    "HttpTransportError",
    "MethodNotAllowed",
    "CsrfTokenMissing",
    "AuthenticationFailed",
    "HttpClient",
    "HttpResponse",
    "extract_csrf_token",
    "extract_cookies",
    "login",
    "TableRow",
    "parse_table",
    "rows_to_json",
    "ScrapePipeline",
    "ScrapeResult",
]
