"""Shared fakes for the edgeos_api tests."""

import json
from unittest.mock import MagicMock

import requests

HOST = "192.168.1.1"
BASE = f"https://{HOST}"

SESSION_ID = "b2f7c1d0e9a84f6c"
CSRF_TOKEN = "5e3c9a7d21f04b88a6c1"


def make_response(status=200, body=b"", set_cookies=(), url=BASE + "/", content_type=None):
    """Build a real requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "Test"
    resp.url = url
    resp.encoding = "utf-8"
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
        content_type = content_type or "application/json"
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp._content_consumed = True
    if content_type:
        resp.headers["Content-Type"] = content_type
    resp.raw = MagicMock()
    resp.raw.headers.getlist.return_value = list(set_cookies)
    if set_cookies:
        resp.headers["Set-Cookie"] = ", ".join(set_cookies)
    return resp


def login_redirect(session_id=SESSION_ID, csrf_token=CSRF_TOKEN):
    cookies = []
    if session_id is not None:
        cookies.append(f"PHPSESSID={session_id}; path=/; secure; HttpOnly")
    if csrf_token is not None:
        cookies.append(f"X-CSRF-TOKEN={csrf_token}; path=/; secure")
    return make_response(303, set_cookies=cookies)


def fake_http(*responses):
    """MagicMock transport whose request() returns *responses* in order."""
    http = MagicMock()
    http.request.side_effect = list(responses)
    return http
