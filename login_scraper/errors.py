"""Exception hierarchy for the login scraper."""


class ScraperError(Exception):
    """Base class for every error raised by login_scraper."""


class ConfigurationError(ScraperError):
    """The ``.env`` file is absent or malformed."""


class HttpTransportError(ScraperError):
    """
    A request never produced an HTTP response (DNS failure, connection
    refused, TLS handshake error, redirect loop, …).

    The original ``requests`` exception is kept as ``__cause__``.
    """

    def __init__(self, url: str, method: str, cause: Exception) -> None:
        self.url = url
        self.method = method
        self.cause = cause
        super().__init__(f"{method} {url} failed: {cause}")


class MethodNotAllowed(ScraperError):
    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method {method!r} is not allowed")


class CsrfTokenMissing(ScraperError):
    """The login page carries no ``<meta name="csrf-token">`` value."""


class AuthenticationFailed(ScraperError):
    """
    The login POST was rejected (HTTP status >= 400), or the protected page
    came back as the login form.
    """
