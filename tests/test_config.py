"""
Tests for the .env settings loader.
"""

import tempfile
import unittest
from pathlib import Path

from login_scraper.config import (
    Credentials,
    EndpointConfig,
    Settings,
    load_settings,
)
from login_scraper.errors import ConfigurationError


VALID_ENV = """\
# Account used by the scraper
EMAIL=user@example.com
PASSWORD=s3cr=t

  # indented comment
LOGIN_URL = https://app.example.com/login
TEST_PAGE_URL=https://app.example.com/empresas
"""


class TestLoadSettings(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.tmp / ".env"
        path.write_text(text, encoding="utf-8")
        return path

    def test_loads_all_four_values(self):
        settings = load_settings(self._write(VALID_ENV))
        self.assertEqual(
            settings,
            Settings(
                credentials=Credentials("user@example.com", "s3cr=t"),
                endpoints=EndpointConfig(
                    "https://app.example.com/login",
                    "https://app.example.com/empresas",
                ),
            ),
        )

    def test_accepts_str_path(self):
        settings = load_settings(str(self._write(VALID_ENV)))
        self.assertEqual(settings.credentials.email, "user@example.com")

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_settings(self.tmp / "absent.env")

    def test_line_without_separator(self):
        path = self._write(VALID_ENV + "JUSTAKEY\n")
        with self.assertRaises(ConfigurationError) as ctx:
            load_settings(path)
        self.assertIn("JUSTAKEY", str(ctx.exception))

    def test_missing_required_key(self):
        text = "EMAIL=a@b.c\nPASSWORD=x\nLOGIN_URL=https://h/login\n"
        with self.assertRaises(ConfigurationError) as ctx:
            load_settings(self._write(text))
        self.assertIn("TEST_PAGE_URL", str(ctx.exception))

    def test_empty_url_rejected(self):
        text = "EMAIL=a@b.c\nPASSWORD=x\nLOGIN_URL=\nTEST_PAGE_URL=https://h/t\n"
        with self.assertRaises(ConfigurationError):
            load_settings(self._write(text))

    def test_settings_are_immutable(self):
        settings = load_settings(self._write(VALID_ENV))
        with self.assertRaises(AttributeError):
            settings.credentials.email = "other@example.com"

    def test_redacted_hides_password(self):
        settings = load_settings(self._write(VALID_ENV))
        redacted = settings.redacted()
        self.assertEqual(redacted["PASSWORD"], "***")
        self.assertNotIn("s3cr=t", str(redacted))
        self.assertEqual(redacted["LOGIN_URL"], "https://app.example.com/login")


if __name__ == "__main__":
    unittest.main()
