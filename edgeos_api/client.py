"""
EdgeOSClient – one authenticated session against one EdgeOS device.

Usage::

    with EdgeOSClient("192.168.1.1", verify_ssl=False) as client:
        client.login("ubnt", "secret")
        tree = client.get_tree(["firewall", "group", "address-group"])
        client.set({"system": {"host-name": "edge"}})

The client is single-owner: it is not safe to share one instance between
threads without external locking.  It never starts threads; call
``heartbeat()`` every ``HEARTBEAT_INTERVAL`` seconds to keep the session
from expiring.
"""

import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import requests

from . import gateway
from .auth import LoginOutcome, LoginStatus, exchange_credentials
from .config import (
    AUTH_URL,
    CONFIG_DOWNLOAD_URL,
    CONFIG_SAVE_URL,
    DOWNLOAD_CHUNK,
    HEARTBEAT_URL,
    LOGOUT_URL,
    REQUEST_TIMEOUT,
)
from .exceptions import (
    AuthProtocolError,
    CredentialsRejectedError,
    TransportError,
    UnexpectedResponseError,
)
from .logging_setup import log, mask
from .operations import (
    Batch,
    BatchItem,
    ConfigurationOperation,
    ConfigurationResponse,
    Delete,
    DeviceOperation,
    Get,
    GetTree,
    Partial,
    Set,
)
from .requester import Requester
from .session import SessionState, base_url, build_session


class EdgeOSClient:
    """Client for the EdgeOS management API of a single device."""

    def __init__(
        self,
        host: str,
        verify_ssl: bool | str = True,
        timeout: float = REQUEST_TIMEOUT,
        http: requests.Session | None = None,
    ) -> None:
        self.host = host
        self.base = base_url(host)
        self.timeout = timeout
        self.http = http if http is not None else build_session(verify_ssl)
        self.state = SessionState()
        self.requester = Requester(self.http, self.base, self.state, timeout)
        self._last_heartbeat = 0.0
        self._closed = False

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str | None:
        """Session id, for push-subscription transports that authenticate with it."""
        return self.state.session_id

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated()

    def login(self, username: str, password: str) -> LoginOutcome:
        """
        Log in and store the session on success.

        Any previous session is discarded first.  Returns the outcome for
        the two non-exceptional failures (INCONCLUSIVE, MISSING_CSRF); the
        session is then left cleared.

        Raises:
            CredentialsRejectedError: the device refused the credentials
            AuthProtocolError: the redirect carried no session cookie
            UnexpectedResponseError: any status other than 200/303
            TransportError: the login POST could not be sent
        """
        self._reset()
        try:
            outcome = exchange_credentials(
                self.http, self.base, username, password, self.timeout
            )
        except requests.RequestException as exc:
            self._reset()
            raise TransportError(f"login POST failed: {exc}") from exc

        if outcome.ok:
            self.state.replace(outcome.session)
            log.info(
                "Logged in to %s (session %s, csrf %s)",
                self.host, mask(outcome.session.session_id), mask(outcome.session.csrf_token),
            )
            return outcome

        self._reset()
        if outcome.status is LoginStatus.REJECTED:
            raise CredentialsRejectedError(outcome.detail)
        if outcome.status is LoginStatus.PROTOCOL_VIOLATION:
            raise AuthProtocolError(f"Unable to find session credentials: {outcome.detail}")
        if outcome.status is LoginStatus.UNEXPECTED:
            raise UnexpectedResponseError(outcome.detail, outcome.status_code)

        log.warning("Login to %s not established: %s", self.host, outcome.detail)
        return outcome

    def logout(self) -> None:
        """GET /logout (the response is ignored) and forget the session."""
        try:
            self.http.request(
                "GET", self.base + LOGOUT_URL,
                timeout=self.timeout, allow_redirects=False,
            )
        except requests.RequestException as exc:
            raise TransportError(f"logout failed: {exc}") from exc
        finally:
            self._reset()
        log.info("Logged out of %s", self.host)

    def _reset(self) -> None:
        self.state.clear()
        self.http.cookies.clear()

    def authenticate(self, username: str, password: str) -> ConfigurationResponse | None:
        """
        Check credentials via /api/edge/auth.json.

        The device validates them but hands back no session tokens; use
        ``login`` to actually open a session.
        """
        data = self.requester.call(
            "POST", AUTH_URL, form={"username": username, "password": password},
        )
        return None if data is None else ConfigurationResponse.from_wire(data)

    def heartbeat(self) -> Any:
        """Keep the session alive; the timestamp parameter strictly increases."""
        now = max(time.time(), self._last_heartbeat + 0.001)
        self._last_heartbeat = now
        return self.requester.call("GET", f"{HEARTBEAT_URL}?_={now!r}")

    def close(self) -> None:
        """Best-effort logout if logged in, then release the transport."""
        if self._closed:
            return
        self._closed = True
        if self.state.is_authenticated():
            try:
                self.logout()
            except Exception as exc:
                log.debug("Logout during close failed (ignored): %s", exc)
        self.state.clear()
        self.http.close()

    def __enter__(self) -> "EdgeOSClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def execute(self, operation: ConfigurationOperation) -> ConfigurationResponse | None:
        return gateway.execute(self.requester, operation)

    def get(self) -> ConfigurationResponse | None:
        return self.execute(Get())

    def get_partial(self, struct: Mapping[str, Any]) -> ConfigurationResponse | None:
        return self.execute(Partial(struct))

    def get_tree(self, path: Iterable[str] = ()) -> ConfigurationResponse | None:
        return self.execute(GetTree(tuple(path)))

    def set(self, document: Mapping[str, Any]) -> ConfigurationResponse | None:
        return self.execute(Set(document))

    def delete(self, document: Mapping[str, Any]) -> ConfigurationResponse | None:
        return self.execute(Delete(document))

    def batch(self, items: Iterable[BatchItem]) -> ConfigurationResponse | None:
        return self.execute(Batch(tuple(items)))

    def prepare_config_download(self) -> ConfigurationResponse | None:
        """Have the device write its full configuration to a temporary file."""
        data = self.requester.call("GET", CONFIG_SAVE_URL)
        return None if data is None else ConfigurationResponse.from_wire(data)

    def download_config(self, dest: Path) -> Path:
        """Stream the file saved by ``prepare_config_download`` to *dest*."""
        resp = self.requester.send("GET", CONFIG_DOWNLOAD_URL, stream=True)
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        try:
            with dest.open("wb") as fh:
                for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK):
                    if chunk:
                        fh.write(chunk)
        except requests.RequestException as exc:
            # A truncated archive must not be mistaken for a backup.
            dest.unlink(missing_ok=True)
            raise TransportError(f"configuration download failed: {exc}") from exc
        finally:
            resp.close()
        log.info("Configuration saved to %s", dest)
        return dest

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def operation(self, name: str, interface: str | None = None) -> ConfigurationResponse | None:
        return self.execute(DeviceOperation(name, interface))

    def reboot(self) -> ConfigurationResponse | None:
        return self.operation("reboot")

    def shutdown(self) -> ConfigurationResponse | None:
        return self.operation("shutdown")

    def factory_reset(self) -> ConfigurationResponse | None:
        """Erase user files and the backup image, back to factory state."""
        return self.operation("factory-reset")

    def reset_default_config(self) -> ConfigurationResponse | None:
        """Reset configuration only; user files and backup image stay."""
        return self.operation("reset-default-config")

    def release_dhcp(self, interface: str) -> ConfigurationResponse | None:
        return self.operation("release-dhcp", interface)

    def renew_dhcp(self, interface: str) -> ConfigurationResponse | None:
        return self.operation("renew-dhcp", interface)

    def clear_traffic_analysis(self) -> ConfigurationResponse | None:
        return self.operation("clear-traffic-analysis")

    def check_firmware_updates(self) -> ConfigurationResponse | None:
        return self.operation("refresh-fw-latest-status")
