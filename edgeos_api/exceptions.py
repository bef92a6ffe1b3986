"""
Exception hierarchy for the EdgeOS API client.

Login failures, a missing session and transport problems are separate
types so callers can branch (retry login, abort, report a version
mismatch) without inspecting messages.
"""


class EdgeOSError(Exception):
    """Base class for every error raised by this package."""


class CredentialsRejectedError(EdgeOSError):
    """The device answered the login form with its incorrect-credentials page."""


class AuthProtocolError(EdgeOSError):
    """The login redirect did not carry the expected session cookie.

    Usually means the firmware changed its authentication mechanism.
    """


class NotAuthenticatedError(EdgeOSError):
    """A CSRF-protected call was attempted without an authenticated session."""


class UnexpectedResponseError(EdgeOSError):
    """The device answered the login form with a status the protocol does not define."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(EdgeOSError):
    """Non-success HTTP status or network failure on a post-login call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(EdgeOSError):
    """The response body is not the JSON object the endpoint should return."""
