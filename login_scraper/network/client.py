"""
HTTP client for the login / scrape requests.

Wraps a ``requests.Session`` so that every call:

* follows redirects,
* sends the browser User-Agent and a form Content-Type,
* carries only the cookie string it is handed (no jar accumulation),
* returns the body and the raw header text as separate values.
"""

from dataclasses import dataclass

import requests
import urllib3
from bs4.dammit import EncodingDetector

from ..config import FORM_CONTENT_TYPE, REQUEST_TIMEOUT, USER_AGENT
from ..errors import HttpTransportError
from ..logging_setup import log

_HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


@dataclass(frozen=True)
class HttpResponse:
    """Result of a single HttpClient call."""
    body: str
    raw_headers: str
    status_code: int


class FixedCookieSession(requests.Session):
    """
    Session that sends the caller's ``Cookie`` header verbatim on every
    redirect hop to the same host.

    requests drops an explicit Cookie header when it follows a redirect and
    rebuilds it from the jar, which would lose duplicate names and nameless
    pairs.  The header is put back here, after the jar has been applied, and
    cookies the jar picked up from the redirect response are not sent.
    """

    def rebuild_auth(self, prepared_request, response):
        super().rebuild_auth(prepared_request, response)
        prepared_request.headers.pop("Cookie", None)
        cookie_header = response.request.headers.get("Cookie")
        if cookie_header is None or self.should_strip_auth(
            response.request.url, prepared_request.url
        ):
            return
        prepared_request.headers["Cookie"] = cookie_header


def build_session(verify_ssl: bool = False) -> requests.Session:
    """
    Return a requests.Session with the fixed browser headers pre-configured.

    Args:
        verify_ssl: Whether to verify TLS certificates and hostnames

    Returns:
        Configured FixedCookieSession instance
    """
    session = FixedCookieSession()
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Content-Type": FORM_CONTENT_TYPE,
    })
    return session


def _header_block(resp: requests.Response) -> str:
    """Render one response's status line and headers as raw HTTP text."""
    raw = resp.raw
    version = _HTTP_VERSIONS.get(getattr(raw, "version", 11), "HTTP/1.1")
    status_line = f"{version} {resp.status_code} {resp.reason or ''}".rstrip()
    # urllib3 keeps repeated headers (Set-Cookie) apart; requests folds them
    headers = getattr(raw, "headers", None) or resp.headers
    lines = [status_line]
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    return "\r\n".join(lines) + "\r\n\r\n"


def format_raw_headers(resp: requests.Response) -> str:
    """
    Return the header text of every hop in the redirect chain, oldest first,
    as a client that reports all received headers ahead of the final body
    would see it.
    """
    return "".join(_header_block(hop) for hop in (*resp.history, resp))


def _decode_body(resp: requests.Response) -> str:
    # header charset, then <meta charset>, then UTF-8; requests alone would
    # fall back to ISO-8859-1 for any text/* without a header charset
    content_type = resp.headers.get("Content-Type", "")
    if "charset=" in content_type.lower():
        resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
    else:
        declared = EncodingDetector.find_declared_encoding(resp.content, is_html=True)
        resp.encoding = declared or "utf-8"
    return resp.text


class HttpClient:
    """
    Issues one HTTP request per call and hands back an HttpResponse.

    TLS verification is OFF by default, matching the upstream hosts this
    scraper is pointed at (self-signed certificates).  Pass
    ``verify_ssl=True`` to turn it on.
    """

    def __init__(
        self,
        verify_ssl: bool = False,
        timeout: float | None = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.session = session if session is not None else build_session(verify_ssl)
        if not verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def request(
        self,
        url: str,
        method: str = "GET",
        form_fields: dict[str, str] | None = None,
        cookie_header: str | None = None,
    ) -> HttpResponse:
        """
        Send *method* to *url*.

        *form_fields* are URL-encoded into the body whatever the method.
        *cookie_header* is sent as ``Cookie:`` on this call (and on each
        redirect hop it follows) and nothing else is remembered between
        calls.

        Raises HttpTransportError when no HTTP response is obtained.
        """
        method = method.upper()
        self.session.cookies.clear()
        log.debug("[HTTP] %s %s (Cookie: %s)", method, url, cookie_header or "-")
        try:
            resp = self.session.request(
                method,
                url,
                data=form_fields or None,
                headers={"Cookie": cookie_header} if cookie_header else None,
                allow_redirects=True,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("[ERR] %s %s failed: %s", method, url, exc)
            raise HttpTransportError(url, method, exc) from exc

        result = HttpResponse(
            body=_decode_body(resp),
            raw_headers=format_raw_headers(resp),
            status_code=resp.status_code,
        )
        log.debug(
            "[HTTP] %s %s → %d (%d redirect(s), %d chars)",
            method, resp.url, result.status_code, len(resp.history), len(result.body),
        )
        return result
