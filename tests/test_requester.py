"""
Tests for CSRF attachment, body encoding and response decoding.
"""

import json
import unittest
from unittest.mock import MagicMock

import requests

from edgeos_api.exceptions import DecodeError, NotAuthenticatedError, TransportError
from edgeos_api.requester import Requester, decode_body
from edgeos_api.session import Session, SessionState

from fakes import BASE, CSRF_TOKEN, SESSION_ID, fake_http, make_response


def _requester(*responses, authenticated=True):
    state = SessionState()
    if authenticated:
        state.replace(Session(SESSION_ID, CSRF_TOKEN))
    return Requester(fake_http(*responses), BASE, state)


class TestCsrfPolicy(unittest.TestCase):
    def test_mutating_call_without_session_sends_nothing(self):
        requester = _requester(make_response(200, {}), authenticated=False)
        with self.assertRaises(NotAuthenticatedError):
            requester.send("POST", "/api/edge/set.json", document={"a": 1}, mutating=True)
        requester.http.request.assert_not_called()

    def test_mutating_call_attaches_exactly_one_token(self):
        requester = _requester(make_response(200, {}))
        requester.send("POST", "/api/edge/set.json", document={"a": 1}, mutating=True)
        headers = requester.http.request.call_args.kwargs["headers"]
        csrf = [value for name, value in headers.items() if name.lower() == "x-csrf-token"]
        self.assertEqual(csrf, [CSRF_TOKEN])

    def test_token_follows_current_session(self):
        requester = _requester(make_response(200, {}))
        requester.state.replace(Session("sess-2", "tok-2"))
        requester.send("POST", "/api/edge/operation/reboot.json", mutating=True)
        headers = requester.http.request.call_args.kwargs["headers"]
        self.assertEqual(headers["X-CSRF-TOKEN"], "tok-2")

    def test_read_call_has_no_csrf_header(self):
        requester = _requester(make_response(200, {}), authenticated=False)
        requester.send("GET", "/api/edge/get.json")
        headers = requester.http.request.call_args.kwargs["headers"]
        self.assertNotIn("X-CSRF-TOKEN", headers)

    def test_redirects_are_not_followed(self):
        requester = _requester(make_response(200, {}))
        requester.send("GET", "/api/edge/get.json")
        self.assertFalse(requester.http.request.call_args.kwargs["allow_redirects"])


class TestBodyEncoding(unittest.TestCase):
    def test_json_body_is_compact_and_drops_nulls(self):
        requester = _requester(make_response(200, {}))
        requester.send(
            "POST", "/api/edge/set.json",
            document={"system": {"host-name": "edge", "domain-name": None}},
            mutating=True,
        )
        kwargs = requester.http.request.call_args.kwargs
        self.assertEqual(kwargs["data"], b'{"system":{"host-name":"edge"}}')
        self.assertTrue(kwargs["headers"]["Content-Type"].startswith("application/json"))

    def test_non_ascii_is_utf8(self):
        requester = _requester(make_response(200, {}))
        requester.send("POST", "/api/edge/set.json", document={"d": "café"}, mutating=True)
        data = requester.http.request.call_args.kwargs["data"]
        self.assertEqual(json.loads(data.decode("utf-8")), {"d": "café"})

    def test_form_body_is_passed_as_form(self):
        requester = _requester(make_response(200, {}))
        requester.send(
            "POST", "/api/edge/operation/renew-dhcp.json",
            form={"interface": "eth0"}, mutating=True,
        )
        kwargs = requester.http.request.call_args.kwargs
        self.assertEqual(kwargs["data"], {"interface": "eth0"})
        self.assertNotIn("Content-Type", kwargs["headers"])


class TestResponseDecoding(unittest.TestCase):
    def test_empty_body_is_none(self):
        self.assertIsNone(decode_body(make_response(200, b"")))

    def test_no_content_status_is_none(self):
        self.assertIsNone(decode_body(make_response(204)))

    def test_empty_object_is_not_none(self):
        self.assertEqual(decode_body(make_response(200, "{}")), {})

    def test_invalid_json_is_decode_error(self):
        with self.assertRaises(DecodeError):
            decode_body(make_response(200, "<html>login</html>"))

    def test_call_decodes(self):
        requester = _requester(make_response(200, {"success": "1"}))
        self.assertEqual(requester.call("GET", "/api/edge/get.json"), {"success": "1"})


class TestTransportErrors(unittest.TestCase):
    def test_server_error_is_transport_error(self):
        requester = _requester(make_response(500, "error"))
        with self.assertRaises(TransportError) as ctx:
            requester.send("GET", "/api/edge/get.json")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIsInstance(ctx.exception.__cause__, requests.HTTPError)

    def test_forbidden_is_transport_error(self):
        requester = _requester(make_response(403, "forbidden"))
        with self.assertRaises(TransportError) as ctx:
            requester.send("POST", "/api/edge/set.json", document={}, mutating=True)
        self.assertEqual(ctx.exception.status_code, 403)

    def test_redirect_is_transport_error(self):
        requester = _requester(make_response(302))
        with self.assertRaises(TransportError) as ctx:
            requester.send("GET", "/api/edge/get.json")
        self.assertEqual(ctx.exception.status_code, 302)

    def test_network_failure_is_transport_error(self):
        requester = _requester(requests.ConnectionError("reset"))
        with self.assertRaises(TransportError) as ctx:
            requester.send("GET", "/api/edge/get.json")
        self.assertIsNone(ctx.exception.status_code)

    def test_streamed_error_response_is_closed(self):
        resp = make_response(500, "error")
        resp.close = MagicMock()
        requester = _requester(resp)
        with self.assertRaises(TransportError):
            requester.send("GET", "/files/config/", stream=True)
        resp.close.assert_called_once()

    def test_streamed_redirect_is_closed(self):
        resp = make_response(302)
        resp.close = MagicMock()
        requester = _requester(resp)
        with self.assertRaises(TransportError):
            requester.send("GET", "/files/config/", stream=True)
        resp.close.assert_called_once()

    def test_no_retry(self):
        requester = _requester(make_response(503, "busy"), make_response(200, {}))
        with self.assertRaises(TransportError):
            requester.send("GET", "/api/edge/get.json")
        self.assertEqual(requester.http.request.call_count, 1)


if __name__ == "__main__":
    unittest.main()
