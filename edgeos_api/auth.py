"""
edgeos_api.auth
===============
Credential exchange with the EdgeOS web UI.

The device does not use status codes the conventional way:

* HTTP 303 (See Other) is the *success* path.  Its ``Set-Cookie`` headers
  carry ``PHPSESSID`` and ``X-CSRF-TOKEN``.  The redirect must not be
  followed, or the cookies are never seen by the caller.
* HTTP 200 is the *failure* path.  The body is the login page again, with
  an incorrect-credentials message when the password was refused.

``classify_login_response`` turns a raw response into a ``LoginOutcome``
without raising; ``exchange_credentials`` performs the POST.  Mapping
outcomes onto exceptions and session state is the client's job.
"""

import enum
from dataclasses import dataclass, field

import requests

from .config import INCORRECT_CREDENTIALS, LOGIN_URL, REQUEST_TIMEOUT
from .cookies import scan_session_cookies, set_cookie_headers
from .logging_setup import log, mask
from .session import Session


class LoginStatus(enum.Enum):
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"
    INCONCLUSIVE = "inconclusive"
    MISSING_CSRF = "missing-csrf"
    PROTOCOL_VIOLATION = "protocol-violation"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class LoginOutcome:
    """
    Result of one login attempt.

    ``session`` is populated only for AUTHENTICATED.  ``session_id`` is also
    reported for MISSING_CSRF, where the device opened a session but gave no
    token for mutating calls.
    """

    status: LoginStatus
    status_code: int
    session: Session | None = None
    session_id: str | None = field(default=None, repr=False)
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is LoginStatus.AUTHENTICATED


def classify_login_response(resp: requests.Response) -> LoginOutcome:
    """Classify the device's answer to the login form."""
    code = resp.status_code

    if code == 200:
        if INCORRECT_CREDENTIALS in resp.text:
            return LoginOutcome(LoginStatus.REJECTED, code, detail=INCORRECT_CREDENTIALS)
        return LoginOutcome(
            LoginStatus.INCONCLUSIVE, code,
            detail="login page returned without a session or an error message",
        )

    if code == 303:
        session_id, csrf_token = scan_session_cookies(set_cookie_headers(resp))
        if session_id is None:
            # The auth mechanism may have changed and no longer uses PHPSESSID.
            return LoginOutcome(
                LoginStatus.PROTOCOL_VIOLATION, code,
                detail="redirect did not set a PHPSESSID cookie",
            )
        if csrf_token is None:
            return LoginOutcome(
                LoginStatus.MISSING_CSRF, code, session_id=session_id,
                detail="redirect did not set an X-CSRF-TOKEN cookie",
            )
        return LoginOutcome(
            LoginStatus.AUTHENTICATED, code,
            session=Session(session_id, csrf_token),
            session_id=session_id,
        )

    return LoginOutcome(
        LoginStatus.UNEXPECTED, code,
        detail=f"unexpected HTTP {code} from the login form",
    )


def exchange_credentials(
    http: requests.Session,
    base: str,
    username: str,
    password: str,
    timeout: float = REQUEST_TIMEOUT,
) -> LoginOutcome:
    """
    POST the login form and classify the answer.

    Network failures propagate as ``requests.RequestException``; every
    answer the device gives becomes a ``LoginOutcome``.
    """
    resp = http.request(
        "POST",
        base + LOGIN_URL,
        data={"username": username, "password": password},
        timeout=timeout,
        allow_redirects=False,
    )
    outcome = classify_login_response(resp)
    log.debug(
        "Login answer: HTTP %s → %s (session %s)",
        resp.status_code, outcome.status.value, mask(outcome.session_id),
    )
    return outcome
