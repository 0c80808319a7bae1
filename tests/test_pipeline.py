"""
Tests for the login → fetch → parse pipeline (HttpClient mocked).
"""

import json
import unittest
from unittest.mock import MagicMock, call

import requests

from login_scraper.config import Credentials, EndpointConfig, Settings
from login_scraper.errors import HttpTransportError
from login_scraper.extract.table import TableRow
from login_scraper.network.client import HttpClient, HttpResponse
from login_scraper.pipeline import ScrapePipeline, ScrapeResult

LOGIN_URL = "https://app.example.com/login"
TARGET_URL = "https://app.example.com/empresas"

SETTINGS = Settings(
    credentials=Credentials("user@example.com", "pw"),
    endpoints=EndpointConfig(LOGIN_URL, TARGET_URL),
)

LOGIN_PAGE = HttpResponse(
    body='<html><head><meta name="csrf-token" content="T1"></head>'
         '<body><form><input name="email"><input name="password"></form></body></html>',
    raw_headers="HTTP/1.1 200 OK\r\nSet-Cookie: XSRF-TOKEN=x; path=/\r\n"
                "Set-Cookie: app_session=A0; path=/; httponly\r\n\r\n",
    status_code=200,
)
LOGIN_POST = HttpResponse(
    body="<html><body>Dashboard</body></html>",
    raw_headers="HTTP/1.1 302 Found\r\nLocation: /home\r\n"
                "Set-Cookie: session=S1; path=/; httponly\r\n\r\n"
                "HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n",
    status_code=200,
)
TARGET_PAGE = HttpResponse(
    body="<html><body><table><thead><tr><th>ID</th></tr></thead><tbody>"
         "<tr><td>1</td><td>Acme</td><td>Main St</td><td>Ref1</td></tr>"
         "<tr><td>2</td><td>Beta Ltda</td><td>Rua São Bento</td><td>Ref2</td></tr>"
         "</tbody></table></body></html>",
    raw_headers="HTTP/1.1 200 OK\r\n\r\n",
    status_code=200,
)


def _client(*responses):
    client = MagicMock(spec=HttpClient)
    client.request.side_effect = list(responses)
    return client


class TestMethodGuard(unittest.TestCase):
    def test_non_post_rejected_without_network(self):
        for method in ("GET", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"):
            with self.subTest(method=method):
                client = _client()
                result = ScrapePipeline(SETTINGS, client).handle(method)
                self.assertEqual(json.loads(result.body),
                                 {"error": "Only POST requests are allowed."})
                self.assertEqual(result.status, 200)
                self.assertTrue(result.content_type.startswith("application/json"))
                self.assertFalse(result.ok)
                client.request.assert_not_called()

    def test_method_is_case_sensitive(self):
        for method in ("post", "Post"):
            with self.subTest(method=method):
                client = _client()
                result = ScrapePipeline(SETTINGS, client).handle(method)
                self.assertEqual(json.loads(result.body),
                                 {"error": "Only POST requests are allowed."})
                client.request.assert_not_called()


class TestHappyPath(unittest.TestCase):
    def setUp(self):
        self.client = _client(LOGIN_PAGE, LOGIN_POST, TARGET_PAGE)
        self.result = ScrapePipeline(SETTINGS, self.client).handle("POST")

    def test_returns_both_rows(self):
        self.assertTrue(self.result.ok)
        self.assertEqual(json.loads(self.result.body), [
            {"ID": "1", "Empresa": "Acme", "Endereço": "Main St", "Referência": "Ref1"},
            {"ID": "2", "Empresa": "Beta Ltda", "Endereço": "Rua São Bento", "Referência": "Ref2"},
        ])
        self.assertEqual(self.result.rows[0], TableRow("1", "Acme", "Main St", "Ref1"))

    def test_request_sequence(self):
        self.assertEqual(self.client.request.mock_calls, [
            call(LOGIN_URL, "GET"),
            call(
                LOGIN_URL, "POST",
                form_fields={"email": "user@example.com", "password": "pw", "_token": "T1"},
                cookie_header="XSRF-TOKEN=x; app_session=A0",
            ),
            call(TARGET_URL, "GET", cookie_header="session=S1"),
        ])

    def test_body_is_pretty_printed_utf8(self):
        self.assertIn("Rua São Bento", self.result.body)
        self.assertTrue(self.result.body.startswith("[\n    {"))


class TestFailures(unittest.TestCase):
    def test_missing_token_stops_after_first_call(self):
        page = HttpResponse("<html><head></head><body></body></html>", "HTTP/1.1 200 OK\r\n\r\n", 200)
        client = _client(page)
        result = ScrapePipeline(SETTINGS, client).handle("POST")
        self.assertEqual(json.loads(result.body), {"error": "CSRF token not found."})
        self.assertEqual(client.request.call_count, 1)

    def test_rejected_login(self):
        client = _client(LOGIN_PAGE, HttpResponse("", "HTTP/1.1 419 unknown\r\n\r\n", 419))
        result = ScrapePipeline(SETTINGS, client).handle("POST")
        self.assertEqual(json.loads(result.body), {"error": "Authentication failed."})
        self.assertEqual(client.request.call_count, 2)

    def test_target_page_is_login_form(self):
        client = _client(LOGIN_PAGE, LOGIN_POST, LOGIN_PAGE)
        result = ScrapePipeline(SETTINGS, client).handle("POST")
        self.assertEqual(json.loads(result.body), {"error": "Authentication failed."})

    def test_transport_error_becomes_json(self):
        client = MagicMock(spec=HttpClient)
        client.request.side_effect = HttpTransportError(
            LOGIN_URL, "GET", requests.ConnectionError("connection refused"),
        )
        result = ScrapePipeline(SETTINGS, client).handle("POST")
        self.assertEqual(json.loads(result.body),
                         {"error": "Upstream request failed: connection refused"})
        self.assertFalse(result.ok)

    def test_page_without_table_gives_empty_array(self):
        empty = HttpResponse("<html><body><p>No data</p></body></html>", "", 200)
        result = ScrapePipeline(SETTINGS, _client(LOGIN_PAGE, LOGIN_POST, empty)).handle("POST")
        self.assertTrue(result.ok)
        self.assertEqual(result.body, "[]")


class TestScrapeResult(unittest.TestCase):
    def test_error_payload(self):
        result = ScrapeResult.error("boom")
        self.assertEqual(result.payload, {"error": "boom"})
        self.assertEqual(result.rows, [])

    def test_success_payload(self):
        result = ScrapeResult.success([TableRow("1")])
        self.assertEqual(result.payload,
                         [{"ID": "1", "Empresa": "", "Endereço": "", "Referência": ""}])


if __name__ == "__main__":
    unittest.main()
