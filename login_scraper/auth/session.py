"""
Session state helpers.

The session is a plain ``Cookie:`` header string rebuilt from the
``Set-Cookie`` lines of the most recent response.
"""

import re

from ..config import _LOGIN_FORM_FIELDS
from ..extract.soup import make_soup

# name=value part only; Path / Expires / HttpOnly / … are dropped
_SET_COOKIE_RE = re.compile(r"^Set-Cookie:[ \t]*([^;\r\n]*)", re.IGNORECASE | re.MULTILINE)


def extract_cookies(raw_headers: str) -> str:
    """
    Collect every ``Set-Cookie: name=value[; attrs]`` line of *raw_headers*
    into a single ``"name=value; name2=value2"`` string, in header order.

    Returns an empty string when no cookie is set.
    """
    pairs = (m.group(1).strip() for m in _SET_COOKIE_RE.finditer(raw_headers or ""))
    return "; ".join(pair for pair in pairs if pair)


def is_login_page(html: str) -> bool:
    """
    Return True when *html* contains the login form, i.e. one ``<form>``
    holding ALL of the login inputs.

    A page that only mentions "password" somewhere (a settings link, a
    column header) does not count.
    """
    soup = make_soup(html)
    for form in soup.find_all("form"):
        names = {inp.get("name") for inp in form.find_all("input")}
        if all(field in names for field in _LOGIN_FORM_FIELDS):
            return True
    return False
