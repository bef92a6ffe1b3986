"""
Authenticated requests against the EdgeOS API.

Reads go out as plain GETs and rely on the PHPSESSID cookie that the login
exchange left in the transport's cookie jar.  Mutating calls are POSTs that
must also carry the CSRF token as an ``X-CSRF-TOKEN`` header; without an
authenticated session they are refused before anything is sent.
"""

import json
from typing import Any

import requests

from .config import CSRF_HEADER, REQUEST_TIMEOUT
from .exceptions import DecodeError, NotAuthenticatedError, TransportError
from .logging_setup import log
from .operations import encode_json
from .session import SessionState

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class Requester:
    """Sends requests for one client, attaching session context per call class."""

    def __init__(
        self,
        http: requests.Session,
        base: str,
        state: SessionState,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.http = http
        self.base = base
        self.state = state
        self.timeout = timeout

    def csrf_headers(self) -> dict[str, str]:
        """Headers for a mutating call; raises when there is no session."""
        if not self.state.is_authenticated():
            raise NotAuthenticatedError(
                "Not logged in: call login() before making changes on the device."
            )
        return {CSRF_HEADER: self.state.csrf_token}

    def send(
        self,
        method: str,
        path: str,
        *,
        document: Any = None,
        form: dict[str, str] | None = None,
        mutating: bool = False,
        stream: bool = False,
    ) -> requests.Response:
        """
        Issue one request and return the raw response.

        Raises:
            NotAuthenticatedError: mutating call without a session (no I/O done)
            TransportError: network failure or a non-2xx status
        """
        headers: dict[str, str] = {}
        if mutating:
            headers.update(self.csrf_headers())

        data: bytes | dict[str, str] | None = None
        if document is not None:
            data = encode_json(document)
            headers["Content-Type"] = JSON_CONTENT_TYPE
        elif form is not None:
            data = form

        url = self.base + path
        log.debug("%s %s", method, path)
        try:
            resp = self.http.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=False,
                stream=stream,
            )
            resp.raise_for_status()
        except requests.HTTPError as exc:
            status = None
            if exc.response is not None:
                status = exc.response.status_code
                exc.response.close()
            raise TransportError(f"{method} {path} failed: HTTP {status}", status) from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        # raise_for_status() lets 3xx through; the API never redirects a valid call.
        if not 200 <= resp.status_code < 300:
            resp.close()
            raise TransportError(
                f"{method} {path} failed: HTTP {resp.status_code}", resp.status_code
            )
        return resp

    def call(self, method: str, path: str, **kwargs: Any) -> Any:
        """``send`` and decode the JSON body; ``None`` when nothing was returned."""
        return decode_body(self.send(method, path, **kwargs))


def decode_body(resp: requests.Response) -> Any:
    """
    Decode a JSON response body.

    An empty body is returned as ``None`` so callers can tell "nothing
    returned" from an empty object.
    """
    if resp.status_code == 204 or not resp.content:
        return None
    try:
        return json.loads(resp.content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(
            f"invalid JSON from {resp.url}: {resp.content[:120]!r}"
        ) from exc
