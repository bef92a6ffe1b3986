"""
Set-Cookie scanning for the EdgeOS login redirect.

The device hands out both secrets as cookies on the HTTP 303 that answers a
successful login form.  Only two cookies matter:

    PHPSESSID=<session id>[; attributes...]
    X-CSRF-TOKEN=<token>[; attributes...]

The value of each is everything between its own name prefix and the first
``;`` (or the end of the header when there are no attributes).
"""

from collections.abc import Iterable

import requests

from .config import CSRF_COOKIE_PREFIX, SESSION_COOKIE_PREFIX


def cookie_value(cookie: str, prefix: str) -> str | None:
    """
    Return the value of *cookie* if it starts with *prefix*, else None.

    >>> cookie_value("PHPSESSID=abc123; path=/; HttpOnly", "PHPSESSID=")
    'abc123'
    >>> cookie_value("X-CSRF-TOKEN=tok", "X-CSRF-TOKEN=")
    'tok'
    """
    if not cookie.startswith(prefix):
        return None
    end = cookie.find(";")
    if end == -1:
        return cookie[len(prefix):]
    return cookie[len(prefix):end]


def scan_session_cookies(cookies: Iterable[str]) -> tuple[str | None, str | None]:
    """
    Scan raw ``Set-Cookie`` header values for the session id and CSRF token.

    Returns ``(session_id, csrf_token)``; either may be None, and an empty
    value counts as missing.  Stops at the
    first header after which both have been seen.
    """
    session_id = None
    csrf_token = None
    for cookie in cookies:
        if session_id is None:
            session_id = cookie_value(cookie, SESSION_COOKIE_PREFIX) or None
        if csrf_token is None:
            csrf_token = cookie_value(cookie, CSRF_COOKIE_PREFIX) or None
        if session_id is not None and csrf_token is not None:
            break
    return session_id, csrf_token


def set_cookie_headers(resp: requests.Response) -> list[str]:
    """
    Return every ``Set-Cookie`` header of *resp* as a separate string.

    ``resp.headers`` folds repeated headers into one comma-joined value,
    which is ambiguous for cookies carrying an ``Expires`` date, so the
    un-merged urllib3 header list is read instead.
    """
    raw_headers = getattr(resp.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return list(raw_headers.getlist("Set-Cookie"))
    merged = resp.headers.get("Set-Cookie")
    return [merged] if merged else []
