"""
Configuration operations and the response envelope shared by every
configuration endpoint.

Each operation is a small frozen dataclass naming its HTTP method, endpoint
and wire document.  ``None`` never reaches the wire: documents pass through
``prune_nulls`` before they are encoded.
"""

import json
import urllib.parse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .config import (
    BATCH_URL,
    DELETE_URL,
    GET_TREE_URL,
    GET_URL,
    INTERFACE_OPERATIONS,
    OPERATION_URL,
    OPERATIONS,
    PARTIAL_URL,
    SET_URL,
)
from .exceptions import DecodeError


# ---------------------------------------------------------------------------
# Wire helpers
# ---------------------------------------------------------------------------

def prune_nulls(value: Any) -> Any:
    """Drop ``None`` entries from mappings, recursively (lists keep their length)."""
    if isinstance(value, Mapping):
        return {k: prune_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [prune_nulls(v) for v in value]
    return value


def encode_json(document: Any) -> bytes:
    """Compact UTF-8 JSON with null fields omitted."""
    return json.dumps(
        prune_nulls(document), separators=(",", ":"), ensure_ascii=False,
    ).encode("utf-8")


def encode_tree_query(path: Sequence[str]) -> str:
    """
    Build the getcfg.json query string: one ``node[]`` per path segment.

    >>> encode_tree_query(["firewall", "group", "address-group"])
    'node[]=firewall&node[]=group&node[]=address-group'
    >>> encode_tree_query([])
    ''
    """
    return "&".join("node[]=" + urllib.parse.quote_plus(segment) for segment in path)


def _flag(data: Mapping[str, Any], key: str) -> bool:
    raw = data.get(key, 0)
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, str)) and str(raw).strip() in ("0", "1"):
        return str(raw).strip() == "1"
    if raw in (None, ""):
        return False
    raise DecodeError(f"{key!r} is not a 0/1 flag: {raw!r}")


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigurationResponse:
    """
    Status envelope returned by configuration and operation endpoints.

    The device reports ``success`` and ``failure`` as 0/1 flags and
    validation problems as ``error``: a mapping of config path to message.
    For get/set/delete/batch the status may sit under the operation's key
    (``"GET"``, ``"SET"``, ...) rather than at the top level.  ``payload``
    keeps the whole decoded object for callers that need the data.
    """

    success: bool
    failure: bool
    errors: dict[str, str] | None = None
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_wire(cls, data: Any, section: str | None = None) -> "ConfigurationResponse":
        if not isinstance(data, dict):
            raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
        status = data
        nested = data.get(section) if section else None
        if isinstance(nested, dict) and ("success" in nested or "failure" in nested):
            status = nested

        success = _flag(status, "success")
        failure = _flag(status, "failure")
        if success and failure:
            raise DecodeError("response reports both success and failure")

        errors = status.get("error", status.get("errors"))
        if errors is not None and not isinstance(errors, dict):
            raise DecodeError(f"'error' is not a mapping: {errors!r}")
        return cls(
            success=success,
            failure=failure,
            errors={str(k): str(v) for k, v in errors.items()} if errors else None,
            payload=data,
        )

    def __str__(self) -> str:
        return f"Failure : {int(self.failure)}, Success : {int(self.success)}"


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Get:
    """Predefined configuration listing."""

    method = "GET"
    section = "GET"
    mutating = False

    def url(self) -> str:
        return GET_URL

    def body(self) -> Any:
        return None


@dataclass(frozen=True)
class Partial:
    """Selected sections; *struct* mirrors the tree with the wanted keys."""

    struct: Mapping[str, Any]

    method = "GET"
    section = "GET"
    mutating = False

    def url(self) -> str:
        query = urllib.parse.quote_plus(encode_json(self.struct).decode("utf-8"))
        return f"{PARTIAL_URL}?struct={query}"

    def body(self) -> Any:
        return None


@dataclass(frozen=True)
class GetTree:
    """Subtree addressed by path segments, e.g. ``("firewall", "group")``."""

    path: tuple[str, ...] = ()

    method = "GET"
    section = "GET"
    mutating = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    def url(self) -> str:
        query = encode_tree_query(self.path)
        return f"{GET_TREE_URL}?{query}" if query else GET_TREE_URL

    def body(self) -> Any:
        return None


@dataclass(frozen=True)
class Set:
    """Set the values in *document* (a partial configuration tree)."""

    document: Mapping[str, Any]

    method = "POST"
    section = "SET"
    mutating = True

    def url(self) -> str:
        return SET_URL

    def body(self) -> Any:
        return self.document


@dataclass(frozen=True)
class Delete:
    """Delete the nodes named in *document*."""

    document: Mapping[str, Any]

    method = "POST"
    section = "DELETE"
    mutating = True

    def url(self) -> str:
        return DELETE_URL

    def body(self) -> Any:
        return self.document


@dataclass(frozen=True)
class BatchItem:
    op: str
    path: tuple[str, ...]
    value: Any = None

    def __post_init__(self) -> None:
        op = self.op.upper()
        if op not in ("SET", "DELETE", "GET"):
            raise ValueError(f"unknown batch op: {self.op!r}")
        object.__setattr__(self, "op", op)
        object.__setattr__(self, "path", tuple(self.path))

    def to_wire(self) -> dict[str, Any]:
        return prune_nulls({"op": self.op, "path": list(self.path), "value": self.value})

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "BatchItem":
        try:
            return cls(data["op"], tuple(data["path"]), data.get("value"))
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"invalid batch item: {data!r}") from exc


@dataclass(frozen=True)
class Batch:
    """Several SET/DELETE/GET items applied in one commit."""

    items: tuple[BatchItem, ...] = ()

    method = "POST"
    section = "BATCH"
    mutating = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def url(self) -> str:
        return BATCH_URL

    def body(self) -> Any:
        return [item.to_wire() for item in self.items]

    @classmethod
    def from_wire(cls, data: Sequence[Mapping[str, Any]]) -> "Batch":
        return cls(tuple(BatchItem.from_wire(item) for item in data))


@dataclass(frozen=True)
class DeviceOperation:
    """
    Fixed-path POST under /api/edge/operation/ (reboot, DHCP renew, ...).

    Carries no JSON payload; DHCP operations send the interface as a form
    field instead.
    """

    name: str
    interface: str | None = None

    method = "POST"
    section = None
    mutating = True

    def __post_init__(self) -> None:
        if self.name not in OPERATIONS:
            raise ValueError(f"unknown device operation: {self.name!r}")
        if self.name in INTERFACE_OPERATIONS and not self.interface:
            raise ValueError(f"{self.name} requires an interface")

    def url(self) -> str:
        return OPERATION_URL.format(name=self.name)

    def body(self) -> Any:
        return None

    def form(self) -> dict[str, str] | None:
        if self.interface is None:
            return None
        return {"interface": self.interface}


ConfigurationOperation = Get | Partial | GetTree | Set | Delete | Batch | DeviceOperation
