"""
Transport construction and session state for the EdgeOS client.

``build_session`` creates the ``requests.Session`` that owns the connection
pool and the cookie jar.  ``Session``/``SessionState`` hold the two secrets
returned by the login exchange.
"""

from dataclasses import dataclass

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import USER_AGENT


def build_session(verify_ssl: bool | str = True) -> requests.Session:
    """
    Return a requests.Session with keep-alive pooling and retries disabled.

    The client never retries on its own, so the urllib3 ``Retry`` policy is
    zeroed rather than left at the adapter default.  *verify_ssl* is passed
    straight to ``session.verify``: a bool, or a path to a CA bundle /
    pinned certificate for devices with self-signed certificates.
    """
    session = requests.Session()
    retry = Retry(total=0, redirect=0, raise_on_redirect=False, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry, pool_connections=1, pool_maxsize=4)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str) -> str:
    """
    Build the base URL for the device.

    EdgeOS only serves its API over HTTPS; a host that already carries a
    scheme is used as given.
    """
    if "://" in host:
        return host.rstrip("/")
    return f"https://{host}"


@dataclass(frozen=True)
class Session:
    """The two secrets of an authenticated session, or neither."""

    session_id: str | None = None
    csrf_token: str | None = None

    def __post_init__(self) -> None:
        if (self.session_id is None) != (self.csrf_token is None):
            raise ValueError("session id and CSRF token must be set together")

    @property
    def authenticated(self) -> bool:
        return self.session_id is not None

    def __repr__(self) -> str:
        return f"Session(authenticated={self.authenticated})"


ANONYMOUS = Session()


class SessionState:
    """
    Holder for the current ``Session``.

    Every mutation swaps the whole immutable value, so readers never observe
    a session id paired with a stale or missing token.
    """

    def __init__(self) -> None:
        self._current = ANONYMOUS

    @property
    def current(self) -> Session:
        return self._current

    @property
    def session_id(self) -> str | None:
        return self._current.session_id

    @property
    def csrf_token(self) -> str | None:
        return self._current.csrf_token

    def is_authenticated(self) -> bool:
        return self._current.authenticated

    def replace(self, session: Session) -> None:
        self._current = session

    def clear(self) -> None:
        self._current = ANONYMOUS
