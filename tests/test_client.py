import logging
import sys
import unittest
from pathlib import Path
from unittest import mock

import requests

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from intelowl.client import IntelOwl  # noqa: E402
from intelowl.context import Context  # noqa: E402
from intelowl.errors import CancelledError, ClientError, TransportError  # noqa: E402
from intelowl.resources.tags_types import TagResponse  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)


def make_response(status_code=200, body=b""):
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.encoding = "utf-8"
    return response


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class ClientTests(unittest.TestCase):
    def _client(self, session, **kwargs):
        client = IntelOwl(url="http://intelowl.example:8080/", token="abc", session=session, **kwargs)
        self.addCleanup(client.close)
        return client

    def test_request_url_headers_and_timeout(self):
        session = FakeSession(make_response(200, '{"ok": true}'))
        client = self._client(session)
        self.assertEqual(client.request("GET", "api/me/access"), {"ok": True})
        method, url, kwargs = session.calls[0]
        self.assertEqual(method, "GET")
        self.assertEqual(url, "http://intelowl.example:8080/api/me/access")
        self.assertEqual(kwargs["headers"]["Authorization"], "Token abc")
        self.assertEqual(kwargs["headers"]["Accept"], "application/json")
        self.assertTrue(kwargs["headers"]["User-Agent"].startswith("intelowl-client/"))
        self.assertEqual(kwargs["timeout"], client.default_timeout)
        self.assertIsNone(kwargs["data"])

    def test_request_passes_query_params(self):
        session = FakeSession(make_response(200, "{}"))
        self._client(session).request("GET", "/api/jobs", params={"page": 2})
        self.assertEqual(session.calls[0][2]["params"], {"page": 2})

    def test_request_per_call_timeout(self):
        session = FakeSession(make_response(200, "{}"))
        self._client(session).request("GET", "/api/jobs", timeout=3)
        self.assertEqual(session.calls[0][2]["timeout"], 3)

    def test_request_zero_timeout_is_not_replaced(self):
        session = FakeSession(make_response(200, "{}"))
        self._client(session).request("GET", "/api/jobs", timeout=0)
        self.assertEqual(session.calls[0][2]["timeout"], 0)

    def test_context_deadline_caps_timeout(self):
        session = FakeSession(make_response(200, "{}"))
        ctx = Context.background().with_timeout(1)
        self._client(session).request("GET", "/api/jobs", ctx=ctx)
        self.assertLessEqual(session.calls[0][2]["timeout"], 1)

    def test_request_encodes_json_body(self):
        session = FakeSession(make_response(200, "{}"))
        self._client(session).request("POST", "/api/tags", json={"label": "x"})
        kwargs = session.calls[0][2]
        self.assertEqual(kwargs["data"], b'{"label": "x"}')
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")

    def test_request_unserializable_body_fails_fast(self):
        session = FakeSession(make_response(200, "{}"))
        with self.assertRaises(ValueError):
            self._client(session).request("POST", "/api/tags", json={"label": object()})
        self.assertEqual(session.calls, [])

    def test_request_json_with_files_rejected(self):
        session = FakeSession(make_response(200, "{}"))
        with self.assertRaises(ValueError):
            self._client(session).request("POST", "/api/analyze_file", json={}, files={"file": b"x"})
        self.assertEqual(session.calls, [])

    def test_unexpected_status_raises_client_error(self):
        session = FakeSession(make_response(500, "Internal Server Error"))
        with self.assertLogs("intelowl.client", level="WARNING"):
            with self.assertRaises(ClientError) as caught:
                self._client(session).request("GET", "/api/tags")
        self.assertEqual(caught.exception.status_code, 500)
        self.assertEqual(caught.exception.message, "Internal Server Error")
        self.assertIsNone(caught.exception.payload)

    def test_expected_set_is_per_call(self):
        session = FakeSession(make_response(201, '{"id": 1}'))
        client = self._client(session)
        with self.assertRaises(ClientError):
            client.request("POST", "/api/tags", json={})
        self.assertEqual(client.request("POST", "/api/tags", json={}, expected=(200, 201)), {"id": 1})

    def test_no_content_decodes_to_true(self):
        session = FakeSession(make_response(204))
        self.assertIs(self._client(session).request("DELETE", "/api/tags/1", expected=(204,), into=bool), True)

    def test_into_none_skips_decoding(self):
        session = FakeSession(make_response(200, "not json"))
        self.assertIsNone(self._client(session).request("GET", "/x", into=None))

    def test_empty_body_decodes_to_zero_value(self):
        session = FakeSession(make_response(200))
        client = self._client(session)
        self.assertEqual(client.request("GET", "/api/tags", into=list[TagResponse]), [])
        self.assertEqual(client.request("GET", "/api/tags/1", into=TagResponse), {})

    def test_bytes_target_returns_raw_content(self):
        session = FakeSession(make_response(200, b"\x00\x01binary"))
        self.assertEqual(self._client(session).request("GET", "/x", into=bytes), b"\x00\x01binary")

    def test_invalid_json_is_transport_error(self):
        session = FakeSession(make_response(200, "<html>"))
        with self.assertRaises(TransportError):
            self._client(session).request("GET", "/api/tags", into=list[TagResponse])

    def test_wrong_shape_is_transport_error(self):
        session = FakeSession(make_response(200, '{"id": 1}'))
        client = self._client(session)
        with self.assertRaises(TransportError):
            client.request("GET", "/api/tags", into=list[TagResponse])
        session.response = make_response(200, "[1, 2]")
        with self.assertRaises(TransportError):
            client.request("GET", "/api/tags", into=list[TagResponse])
        with self.assertRaises(TransportError):
            client.request("GET", "/api/tags/1", into=TagResponse)

    def test_connection_error_is_transport_error(self):
        error = requests.ConnectionError("refused")
        session = FakeSession(error=error)
        with self.assertRaises(TransportError) as caught:
            self._client(session).request("GET", "/api/tags")
        self.assertNotIsInstance(caught.exception, ClientError)
        self.assertIs(caught.exception.cause, error)
        self.assertIs(caught.exception.__cause__, error)

    def test_timeout_is_transport_error(self):
        session = FakeSession(error=requests.ReadTimeout("slow"))
        with self.assertRaises(TransportError):
            self._client(session).request("GET", "/api/tags")

    def test_cancelled_context_sends_nothing(self):
        session = FakeSession(make_response(200, "{}"))
        ctx = Context.background().with_cancel()
        ctx.cancel()
        with self.assertRaises(CancelledError):
            self._client(session).request("GET", "/api/tags", ctx=ctx)
        self.assertEqual(session.calls, [])

    def test_resources_are_composed(self):
        client = self._client(FakeSession())
        for name in ("tags", "jobs", "analyzers", "connectors", "playbooks", "analyses", "users"):
            self.assertIs(getattr(client, name)._client, client)
        self.assertTrue(callable(client.tools.jobs.wait_for_job))

    def test_context_manager_leaves_caller_session_open(self):
        session = FakeSession()
        with IntelOwl(url="http://x", session=session) as client:
            self.assertIsInstance(client, IntelOwl)
        self.assertFalse(session.closed)

    def test_close_leaves_caller_session_open(self):
        session = FakeSession()
        client = IntelOwl(url="http://x", session=session)
        client.close()
        self.assertFalse(session.closed)

    def test_environment_defaults(self):
        with mock.patch("intelowl.client.DEFAULT_URL", "http://env.example"), mock.patch(
            "intelowl.client.DEFAULT_TOKEN", "env-token"
        ):
            session = FakeSession(make_response(200, "[]"))
            client = IntelOwl(session=session)
            self.addCleanup(client.close)
            client.tags.list()
        method, url, kwargs = session.calls[0]
        self.assertEqual(url, "http://env.example/api/tags")
        self.assertEqual(kwargs["headers"]["Authorization"], "Token env-token")


if __name__ == "__main__":
    unittest.main()
