import logging
import socket
import sys
import threading
import time
import unittest
from pathlib import Path
from unittest import mock

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from intelowl.context import Context  # noqa: E402
from intelowl.errors import (  # noqa: E402
    CancelledError,
    ClientError,
    DeadlineExceededError,
    TransportError,
)
from intelowl.transport import Transport  # noqa: E402

from _server import ReplayServer, make_session  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)


def unused_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TransportTests(unittest.TestCase):
    def _transport(self, url, **kwargs):
        session = make_session()
        self.addCleanup(session.close)
        transport = Transport(url, token="abc", session=session, **kwargs)
        self.addCleanup(transport.close)
        return transport

    def test_send_returns_read_response(self):
        with ReplayServer(200, '{"id": 1}') as server:
            response = self._transport(server.url).send(Context.background(), "GET", "/api/tags/1")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b'{"id": 1}')

    def test_send_returns_error_statuses_untouched(self):
        with ReplayServer(404, '{"detail": "Not found."}') as server:
            response = self._transport(server.url).send(Context.background(), "GET", "/api/tags/9")
        self.assertEqual(response.status_code, 404)

    def test_headers_property_is_a_copy(self):
        transport = self._transport("http://localhost")
        transport.headers["Authorization"] = "changed"
        self.assertEqual(transport.headers["Authorization"], "Token abc")

    def test_no_token_no_authorization_header(self):
        transport = Transport("http://localhost")
        self.addCleanup(transport.close)
        self.assertNotIn("Authorization", transport.headers)

    def test_cancel_in_flight(self):
        with ReplayServer(200, "{}", delay=1.0) as server:
            transport = self._transport(server.url)
            ctx = Context.background().with_cancel()
            timer = threading.Timer(0.1, ctx.cancel)
            timer.start()
            started = time.monotonic()
            with self.assertRaises(CancelledError):
                transport.send(ctx, "GET", "/api/tags")
            elapsed = time.monotonic() - started
            timer.join()
        self.assertLess(elapsed, 0.9)

    def test_deadline_in_flight(self):
        with ReplayServer(200, "{}", delay=1.0) as server:
            transport = self._transport(server.url)
            ctx = Context.background().with_timeout(0.1)
            with self.assertRaises(DeadlineExceededError) as caught:
                transport.send(ctx, "GET", "/api/tags")
        self.assertIsInstance(caught.exception, TransportError)
        self.assertNotIsInstance(caught.exception, ClientError)

    def test_parent_cancel_aborts_child(self):
        with ReplayServer(200, "{}", delay=1.0) as server:
            transport = self._transport(server.url)
            parent = Context.background().with_cancel()
            child = parent.with_timeout(30)
            timer = threading.Timer(0.1, parent.cancel)
            timer.start()
            with self.assertRaises(CancelledError):
                transport.send(child, "GET", "/api/tags")
            timer.join()

    def test_cancel_before_send(self):
        with ReplayServer(200, "{}") as server:
            ctx = Context.background().with_cancel()
            ctx.cancel()
            with self.assertRaises(CancelledError):
                self._transport(server.url).send(ctx, "GET", "/api/tags")
        self.assertEqual(server.requests, [])

    def test_cancel_after_response_is_noop(self):
        with ReplayServer(200, '{"id": 1}') as server:
            ctx = Context.background().with_cancel()
            response = self._transport(server.url).send(ctx, "GET", "/api/tags/1")
            ctx.cancel()
        self.assertEqual(response.json(), {"id": 1})

    def test_concurrent_sends_do_not_queue(self):
        with ReplayServer(200, "[]", delay=1.0) as server:
            transport = self._transport(server.url)
            statuses = []

            def send():
                statuses.append(transport.send(Context.background(), "GET", "/api/tags").status_code)

            threads = [threading.Thread(target=send) for _ in range(16)]
            started = time.monotonic()
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()
            elapsed = time.monotonic() - started
        self.assertEqual(statuses, [200] * 16)
        self.assertLess(elapsed, 1.6)

    def test_close_leaves_caller_session_open(self):
        session = make_session()
        self.addCleanup(session.close)
        transport = Transport("http://localhost", session=session)
        with mock.patch.object(session, "close") as close:
            transport.close()
        close.assert_not_called()

    def test_close_releases_own_session(self):
        transport = Transport("http://localhost")
        with mock.patch.object(transport._session, "close") as close:
            transport.close()
        close.assert_called_once_with()

    def test_zero_timeout_is_passed_through(self):
        session = make_session()
        self.addCleanup(session.close)
        transport = Transport("http://localhost", session=session)
        with mock.patch.object(session, "request", side_effect=ValueError("timeout must be positive")) as request:
            with self.assertRaises(ValueError):
                transport.send(Context.background(), "GET", "/api/tags", timeout=0)
        self.assertEqual(request.call_args.kwargs["timeout"], 0)

    def test_connection_refused(self):
        transport = self._transport(f"http://127.0.0.1:{unused_port()}")
        with self.assertRaises(TransportError) as caught:
            transport.send(Context.background(), "GET", "/api/tags")
        self.assertIsNotNone(caught.exception.cause)

    def test_socket_timeout(self):
        with ReplayServer(200, "{}", delay=1.0) as server:
            transport = self._transport(server.url, default_timeout=0.1)
            with self.assertRaises(TransportError) as caught:
                transport.send(Context.background(), "GET", "/api/tags")
        self.assertNotIsInstance(caught.exception, (CancelledError, DeadlineExceededError))


if __name__ == "__main__":
    unittest.main()
