"""
edgeos_api
==========
Python client for the web management API of Ubiquiti EdgeOS routers.

Package structure
-----------------
edgeos_api/
├── __init__.py       – package init and public API
├── config.py         – endpoint paths, cookie names, timeouts
├── logging_setup.py  – colorlog console logging
├── exceptions.py     – error hierarchy
├── cookies.py        – Set-Cookie scanning for PHPSESSID / X-CSRF-TOKEN
├── session.py        – requests.Session factory and session state
├── auth.py           – login exchange and outcome classification
├── requester.py      – CSRF-aware request sending and JSON decoding
├── operations.py     – configuration operations and response envelope
├── gateway.py        – runs an operation through the requester
├── client.py         – EdgeOSClient facade
└── cli.py            – argparse CLI (``python -m edgeos_api``)

Quick start
-----------
    from edgeos_api import EdgeOSClient

    with EdgeOSClient("192.168.1.1") as client:
        client.login("ubnt", "your_password")
        print(client.get_tree(["firewall", "group"]).payload)
"""

from .auth import LoginOutcome, LoginStatus, classify_login_response
from .client import EdgeOSClient
from .config import HEARTBEAT_INTERVAL
from .exceptions import (
    AuthProtocolError,
    CredentialsRejectedError,
    DecodeError,
    EdgeOSError,
    NotAuthenticatedError,
    TransportError,
    UnexpectedResponseError,
)
from .operations import (
    Batch,
    BatchItem,
    ConfigurationResponse,
    Delete,
    DeviceOperation,
    Get,
    GetTree,
    Partial,
    Set,
)
from .session import Session, SessionState

__all__ = [
    "EdgeOSClient",
    "HEARTBEAT_INTERVAL",
    "LoginOutcome",
    "LoginStatus",
    "classify_login_response",
    "Session",
    "SessionState",
    "Get",
    "Partial",
    "GetTree",
    "Set",
    "Delete",
    "Batch",
    "BatchItem",
    "DeviceOperation",
    "ConfigurationResponse",
    "EdgeOSError",
    "CredentialsRejectedError",
    "AuthProtocolError",
    "NotAuthenticatedError",
    "UnexpectedResponseError",
    "TransportError",
    "DecodeError",
]
