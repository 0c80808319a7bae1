"""Configuration constants and the ``.env`` settings loader."""

from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values
from dotenv.parser import parse_stream

from .errors import ConfigurationError

DEFAULT_ENV_FILE = ".env"
DEFAULT_LISTEN   = "127.0.0.1"
DEFAULT_PORT     = 8080

# Keys expected in the .env file
ENV_EMAIL      = "EMAIL"
ENV_PASSWORD   = "PASSWORD"
ENV_LOGIN_URL  = "LOGIN_URL"
ENV_TARGET_URL = "TEST_PAGE_URL"
REQUIRED_KEYS  = (ENV_EMAIL, ENV_PASSWORD, ENV_LOGIN_URL, ENV_TARGET_URL)

# Sent on every upstream request
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/89.0.4389.82 Safari/537.36"
)
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"

REQUEST_TIMEOUT = None   # seconds per HTTP request; None = transport default

# Login form field names
FIELD_EMAIL    = "email"
FIELD_PASSWORD = "password"
FIELD_TOKEN    = "_token"

CSRF_META_SELECTOR = 'meta[name="csrf-token"]'

# Output keys, in cell order
ROW_FIELDS = ("ID", "Empresa", "Endereço", "Referência")

# A page is the login form when a single <form> holds ALL of these inputs
_LOGIN_FORM_FIELDS = (FIELD_EMAIL, FIELD_PASSWORD)

ERR_METHOD_NOT_ALLOWED = "Only POST requests are allowed."
ERR_CSRF_MISSING       = "CSRF token not found."
ERR_AUTH_FAILED        = "Authentication failed."
ERR_UPSTREAM           = "Upstream request failed: {cause}"


@dataclass(frozen=True)
class Credentials:
    """Account used for the form login."""
    email: str
    password: str


@dataclass(frozen=True)
class EndpointConfig:
    """Login form URL and the protected page holding the table."""
    login_url: str
    target_url: str


@dataclass(frozen=True)
class Settings:
    credentials: Credentials
    endpoints: EndpointConfig

    def redacted(self) -> dict:
        """Return the settings as a dict that is safe to log."""
        return {
            ENV_EMAIL:      self.credentials.email,
            ENV_PASSWORD:   "***" if self.credentials.password else "",
            ENV_LOGIN_URL:  self.endpoints.login_url,
            ENV_TARGET_URL: self.endpoints.target_url,
        }


def _check_syntax(path: Path) -> None:
    """
    Raise ConfigurationError for the first line that is not a comment,
    blank, or ``KEY=value`` binding.
    """
    with path.open(encoding="utf-8") as fh:
        for binding in parse_stream(fh):
            line = binding.original.line
            if binding.error:
                raise ConfigurationError(
                    f"{path}:{line}: cannot parse {binding.original.string.strip()!r}"
                )
            # A bare key ("EMAIL") parses fine but has no separator
            if binding.key is not None and binding.value is None:
                raise ConfigurationError(
                    f"{path}:{line}: missing '=' after {binding.key!r}"
                )


def load_settings(path: str | Path = DEFAULT_ENV_FILE) -> Settings:
    """
    Read EMAIL, PASSWORD, LOGIN_URL and TEST_PAGE_URL from a ``.env`` file.

    ``#`` comment lines and blank lines are skipped; keys and values are
    trimmed.  The process environment is left untouched – the returned
    Settings value is passed explicitly to whatever needs it.

    Raises ConfigurationError when the file is absent, a line has no
    ``=`` separator, a required key is missing, or a URL is empty.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"The .env file was not found: {path}")

    _check_syntax(path)
    values = dotenv_values(path, interpolate=False, encoding="utf-8")

    missing = [key for key in REQUIRED_KEYS if key not in values]
    if missing:
        raise ConfigurationError(
            f"{path}: missing required key(s): {', '.join(missing)}"
        )

    for key in (ENV_LOGIN_URL, ENV_TARGET_URL):
        if not (values[key] or "").strip():
            raise ConfigurationError(f"{path}: {key} is empty")

    return Settings(
        credentials=Credentials(
            email=(values[ENV_EMAIL] or "").strip(),
            password=(values[ENV_PASSWORD] or "").strip(),
        ),
        endpoints=EndpointConfig(
            login_url=values[ENV_LOGIN_URL].strip(),
            target_url=values[ENV_TARGET_URL].strip(),
        ),
    )
