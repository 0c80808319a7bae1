"""Authentication submodule – CSRF token, session cookies, form login."""

from login_scraper.auth.login import fetch_csrf_token, login
from login_scraper.auth.session import extract_cookies, is_login_page
from login_scraper.auth.token import extract_csrf_token

__all__ = [
    "fetch_csrf_token",
    "login",
    "extract_cookies",
    "is_login_page",
    "extract_csrf_token",
]
