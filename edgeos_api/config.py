"""Configuration constants for the EdgeOS management API client."""

import os

DEFAULT_HOST = os.environ.get("EDGEOS_HOST", "192.168.1.1")
# Credentials can also be supplied via EDGEOS_USER / EDGEOS_PASSWORD env vars
DEFAULT_USER = os.environ.get("EDGEOS_USER", "ubnt")
DEFAULT_PASSWORD = os.environ.get("EDGEOS_PASSWORD", "")

USER_AGENT = "python-edgeos-api"

LOGIN_URL      = "/"
LOGOUT_URL     = "/logout"
AUTH_URL       = "/api/edge/auth.json"
HEARTBEAT_URL  = "/api/edge/heartbeat.json"

GET_URL        = "/api/edge/get.json"
PARTIAL_URL    = "/api/edge/partial.json"
GET_TREE_URL   = "/api/edge/getcfg.json"
SET_URL        = "/api/edge/set.json"
DELETE_URL     = "/api/edge/delete.json"
BATCH_URL      = "/api/edge/batch.json"

CONFIG_SAVE_URL     = "/api/edge/config/save.json"
CONFIG_DOWNLOAD_URL = "/files/config/"

OPERATION_URL  = "/api/edge/operation/{name}.json"

# Operation endpoints under /api/edge/operation/ that accept an "interface" form field
INTERFACE_OPERATIONS = frozenset(["release-dhcp", "renew-dhcp"])
OPERATIONS = frozenset([
    "reboot",
    "shutdown",
    "factory-reset",
    "reset-default-config",
    "clear-traffic-analysis",
    "refresh-fw-latest-status",
]) | INTERFACE_OPERATIONS

SESSION_COOKIE_PREFIX = "PHPSESSID="
CSRF_COOKIE_PREFIX    = "X-CSRF-TOKEN="
CSRF_HEADER           = "X-CSRF-TOKEN"

# Literal text of the login page when credentials are refused (served with HTTP 200)
INCORRECT_CREDENTIALS = "The username or password you entered is incorrect"

REQUEST_TIMEOUT    = 15    # seconds per HTTP request
HEARTBEAT_INTERVAL = 30    # seconds; must stay below the device's idle-session timeout
DOWNLOAD_CHUNK     = 64 * 1024
