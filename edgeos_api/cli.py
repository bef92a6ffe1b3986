"""
Command-line interface for the EdgeOS API client.

Logs in, runs one command, prints the decoded answer as JSON and logs out.
"""

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import Any

import urllib3

from .client import EdgeOSClient
from .config import (
    DEFAULT_HOST,
    DEFAULT_PASSWORD,
    DEFAULT_USER,
    INTERFACE_OPERATIONS,
    OPERATIONS,
    REQUEST_TIMEOUT,
)
from .exceptions import EdgeOSError
from .logging_setup import log, setup_logging
from .operations import BatchItem


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="edgeos-api",
        description="Query and change the configuration of an EdgeOS router "
                    "through its web management API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "User and password can also be provided via the EDGEOS_USER and\n"
            "EDGEOS_PASSWORD env vars.  If the password is not supplied and\n"
            "not in the environment, you will be prompted for it.\n\n"
            "Examples:\n"
            "  edgeos-api get-tree firewall group address-group\n"
            "  edgeos-api set changes.json\n"
            "  edgeos-api op renew-dhcp --interface eth0\n"
        ),
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST,
        help=f"Router address or URL (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--user", default=DEFAULT_USER,
        help=f"Admin username (default: {DEFAULT_USER})",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="Admin password (overrides EDGEOS_PASSWORD env var)",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (use for self-signed certs)",
    )
    parser.add_argument(
        "--ca-bundle", default=None,
        help="CA bundle or pinned certificate (.crt) used to verify the router",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("get", help="Predefined configuration listing")
    p = sub.add_parser("partial", help="Selected sections (JSON struct)")
    p.add_argument("struct", help='e.g. \'{"system": {}, "interfaces": {}}\'')
    p = sub.add_parser("get-tree", help="Subtree by path segments")
    p.add_argument("path", nargs="*")
    for name in ("set", "delete", "batch"):
        p = sub.add_parser(name, help=f"{name.capitalize()} from a JSON file ('-' for stdin)")
        p.add_argument("file")
    p = sub.add_parser("op", help="Device operation (reboot, renew-dhcp, ...)")
    p.add_argument("name", choices=sorted(OPERATIONS))
    p.add_argument("--interface", default=None, help="Interface for DHCP operations")
    sub.add_parser("heartbeat", help="Send one session heartbeat")
    p = sub.add_parser("backup", help="Download the full configuration archive")
    p.add_argument("output", type=Path)
    args = parser.parse_args(argv)
    if args.command == "op" and args.name in INTERFACE_OPERATIONS and not args.interface:
        parser.error(f"op {args.name} requires --interface")
    return args


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def run_command(client: EdgeOSClient, args: argparse.Namespace) -> Any:
    cmd = args.command
    if cmd == "get":
        return client.get()
    if cmd == "partial":
        return client.get_partial(json.loads(args.struct))
    if cmd == "get-tree":
        return client.get_tree(args.path)
    if cmd == "set":
        return client.set(_load_json(args.file))
    if cmd == "delete":
        return client.delete(_load_json(args.file))
    if cmd == "batch":
        return client.batch(BatchItem.from_wire(item) for item in _load_json(args.file))
    if cmd == "op":
        return client.operation(args.name, args.interface)
    if cmd == "heartbeat":
        return client.heartbeat()
    if cmd == "backup":
        client.prepare_config_download()
        return {"saved": str(client.download_config(args.output))}
    raise ValueError(f"unknown command: {cmd}")


def _to_json(result: Any) -> str:
    if result is None:
        return "null"
    payload = getattr(result, "payload", result)
    return json.dumps(payload, indent=2, sort_keys=True)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    verify: bool | str = args.ca_bundle or args.verify_ssl
    if verify is False:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    if not args.password:
        args.password = getpass.getpass("Router password: ")

    try:
        with EdgeOSClient(args.host, verify_ssl=verify, timeout=args.timeout) as client:
            outcome = client.login(args.user, args.password)
            if not outcome.ok:
                log.error("Login did not produce a usable session: %s", outcome.detail)
                return 1
            result = run_command(client, args)
    except EdgeOSError as exc:
        log.error("%s: %s", type(exc).__name__, exc)
        return 1
    except (ValueError, OSError) as exc:
        # Bad JSON input or an unreadable file.
        log.error("%s: %s", type(exc).__name__, exc)
        return 1

    print(_to_json(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
