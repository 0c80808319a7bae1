"""Anti-CSRF token extraction from the login page."""

from ..config import CSRF_META_SELECTOR
from ..extract.soup import make_soup
from ..logging_setup import log


def extract_csrf_token(html: str) -> str | None:
    """
    Return the ``content`` of the first ``<meta name="csrf-token">`` in
    *html*, or None when there is no such element (or it has no content
    attribute).  Malformed markup never raises.
    """
    meta = make_soup(html).select_one(CSRF_META_SELECTOR)
    if meta is None:
        log.debug("[LOGIN] No csrf-token meta tag on the login page")
        return None
    token = meta.get("content")
    log.debug("[LOGIN] CSRF token: %s", token)
    return token
