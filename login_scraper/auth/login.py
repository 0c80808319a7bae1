"""CSRF-protected form login."""

from ..config import FIELD_EMAIL, FIELD_PASSWORD, FIELD_TOKEN, Settings
from ..errors import AuthenticationFailed, CsrfTokenMissing
from ..logging_setup import log
from ..network.client import HttpClient
from .session import extract_cookies
from .token import extract_csrf_token


def fetch_csrf_token(client: HttpClient, login_url: str) -> tuple[str, str]:
    """
    GET the login page without cookies and return ``(token, cookies)``.

    Raises CsrfTokenMissing when the page has no (or an empty) csrf-token
    meta tag.
    """
    page = client.request(login_url, "GET")
    token = extract_csrf_token(page.body)
    if not token:
        log.error("[LOGIN] CSRF token not found on %s (HTTP %d)", login_url, page.status_code)
        raise CsrfTokenMissing(login_url)
    cookies = extract_cookies(page.raw_headers)
    log.debug("[LOGIN] Cookies after GET login page: %r", cookies)
    return token, cookies


def login(client: HttpClient, settings: Settings) -> str:
    """
    Authenticate with the configured credentials and return the session
    cookie string to use for the protected page.

      GET  login_url                 → csrf-token meta + pre-login cookies
      POST login_url  email / password / _token  with the pre-login cookies

    The returned cookie string is rebuilt from the POST response alone; any
    cookie set by the GET but not re-sent by the POST is dropped.

    Raises CsrfTokenMissing, AuthenticationFailed (POST answered with
    HTTP >= 400) or HttpTransportError.
    """
    login_url = settings.endpoints.login_url
    token, cookies = fetch_csrf_token(client, login_url)

    payload = {
        FIELD_EMAIL:    settings.credentials.email,
        FIELD_PASSWORD: settings.credentials.password,
        FIELD_TOKEN:    token,
    }
    resp = client.request(login_url, "POST", form_fields=payload, cookie_header=cookies)
    if resp.status_code >= 400:
        log.error(
            "[LOGIN] Login rejected with HTTP %d – check EMAIL / PASSWORD",
            resp.status_code,
        )
        raise AuthenticationFailed(f"login POST returned HTTP {resp.status_code}")

    session_cookies = extract_cookies(resp.raw_headers)
    log.info(
        "[LOGIN] Login submitted as %s (HTTP %d). Active cookies: %s",
        settings.credentials.email,
        resp.status_code,
        [pair.split("=", 1)[0] for pair in session_cookies.split("; ") if pair],
    )
    return session_cookies
