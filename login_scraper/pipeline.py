"""
Login → fetch → parse pipeline.

One ``ScrapePipeline.handle()`` call is one scrape:

  1. refuse anything but POST
  2. GET the login page and read its CSRF token
  3. POST the credentials with the login-page cookies
  4. GET the protected page with the cookies the login POST set
  5. parse the table and answer with it as JSON

Every outcome – including failures – becomes a JSON body.
"""

import json
from dataclasses import dataclass, field

from .auth.login import login
from .auth.session import is_login_page
from .config import (
    ERR_AUTH_FAILED,
    ERR_CSRF_MISSING,
    ERR_METHOD_NOT_ALLOWED,
    ERR_UPSTREAM,
    JSON_CONTENT_TYPE,
    Settings,
)
from .errors import (
    AuthenticationFailed,
    CsrfTokenMissing,
    HttpTransportError,
    MethodNotAllowed,
)
from .extract.table import TableRow, parse_table, rows_to_json
from .logging_setup import log
from .network.client import HttpClient


@dataclass
class ScrapeResult:
    """What the endpoint sends back: status, content type and JSON body."""
    body: str
    payload: object = None
    status: int = 200
    content_type: str = JSON_CONTENT_TYPE
    rows: list[TableRow] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not isinstance(self.payload, dict)

    @classmethod
    def error(cls, message: str) -> "ScrapeResult":
        payload = {"error": message}
        return cls(body=json.dumps(payload, ensure_ascii=False), payload=payload)

    @classmethod
    def success(cls, rows: list[TableRow]) -> "ScrapeResult":
        return cls(
            body=rows_to_json(rows),
            payload=[row.to_dict() for row in rows],
            rows=rows,
        )


class ScrapePipeline:
    """Runs the login-then-scrape flow with explicitly injected settings."""

    def __init__(self, settings: Settings, client: HttpClient | None = None) -> None:
        self.settings = settings
        self.client = client if client is not None else HttpClient()

    def fetch_rows(self, cookies: str) -> list[TableRow]:
        """GET the protected page with *cookies* and parse its table."""
        target_url = self.settings.endpoints.target_url
        page = self.client.request(target_url, "GET", cookie_header=cookies)
        log.info("[FETCH] %s → HTTP %d", target_url, page.status_code)
        if is_login_page(page.body):
            log.error("[FETCH] Protected page returned the login form – not logged in")
            raise AuthenticationFailed(f"{target_url} served the login form")
        return parse_table(page.body)

    def run(self, method: str) -> list[TableRow]:
        """Run the flow and return the rows; failures are raised."""
        if method != "POST":
            raise MethodNotAllowed(method)
        cookies = login(self.client, self.settings)
        return self.fetch_rows(cookies)

    def handle(self, method: str) -> ScrapeResult:
        """Run the flow and map every known outcome to a JSON ScrapeResult."""
        try:
            rows = self.run(method)
        except MethodNotAllowed:
            log.warning("[ERR] Rejected %s request", method)
            return ScrapeResult.error(ERR_METHOD_NOT_ALLOWED)
        except CsrfTokenMissing:
            return ScrapeResult.error(ERR_CSRF_MISSING)
        except AuthenticationFailed:
            return ScrapeResult.error(ERR_AUTH_FAILED)
        except HttpTransportError as exc:
            return ScrapeResult.error(ERR_UPSTREAM.format(cause=exc.cause))

        log.info("[PARSE] %d row(s) scraped", len(rows))
        return ScrapeResult.success(rows)
