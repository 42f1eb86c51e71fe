"""Command-line client for exercising the identity API."""

from __future__ import annotations

import argparse
import os
import sys
import urllib.error
import urllib.request
from http import HTTPStatus

from zkidentity.utilities import serialize

DEFAULT_BASE = "http://localhost:9000"

_USAGE = """Usage: cli <command> [flags]

Commands:
  create   -name <name>                 POST /api/v1/
  get      -id <id>                     GET  /api/v1/:id
  verify   -id <id> -schema <schema>    POST /api/v1/verify

Flags:
  -name      Identity name (for create)
  -id        Identity ID (for get/verify)
  -schema    ZKP schema (for verify)

Environment:
  API_BASE   override default http://localhost:9000
"""


def usage() -> None:
    """Print the command summary to stdout."""
    print(_USAGE)


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def do_request(method: str, url: str, body: bytes | None = None) -> int:
    """Send a request, print status and body, and return the status code.

    Non-2xx responses are reported on stderr; connection errors raise ``OSError``.
    """
    data = None if method == "GET" else body
    req = urllib.request.Request(url, data=data, method=method)
    if body is not None:
        req.add_header("Content-Type", "application/json")

    try:
        response = urllib.request.urlopen(req)
    except urllib.error.HTTPError as exc:
        response = exc

    with response:
        status = response.getcode()
        print(f"→ {method} {url}")
        print(f"← {status} {_status_text(status)}\n")
        if not 200 <= status < 300:
            print(f"Error: HTTP {status} - {_status_text(status)}", file=sys.stderr)
        try:
            payload = response.read()
        except OSError as exc:
            print(f"Failed to read response body: {exc}", file=sys.stderr)
        else:
            sys.stdout.write(payload.decode("utf-8", "replace"))
        print()
    return status


def _parser(command: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=command)
    if command == "create":
        parser.add_argument("-name", "--name", default="", help="Identity name (required)")
    else:
        parser.add_argument("-id", "--id", default="", help="Identity ID (required)")
    if command == "verify":
        parser.add_argument("-schema", "--schema", default="", help="ZKP schema (required)")
    return parser


def _missing(parser: argparse.ArgumentParser, message: str) -> None:
    print(message, file=sys.stderr)
    parser.print_help(sys.stderr)
    raise SystemExit(1)


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    base = os.environ.get("API_BASE") or DEFAULT_BASE

    if not args:
        usage()
        return 0

    command, rest = args[0], args[1:]
    if command not in ("create", "get", "verify"):
        usage()
        print(f"Unknown command: {command}\n", file=sys.stderr)
        raise SystemExit(1)

    parser = _parser(command)
    options = parser.parse_args(rest)

    if command == "create":
        if not options.name:
            _missing(parser, "Missing required flag: -name")
        method, url = "POST", base + "/api/v1"
        body = serialize({"identity_name": options.name})
    elif command == "get":
        if not options.id:
            _missing(parser, "Missing required flag: -id")
        method, url, body = "GET", base + "/api/v1/" + options.id, None
    else:
        if not options.id or not options.schema:
            _missing(parser, "Missing required flags: -id and -schema")
        method, url = "POST", base + "/api/v1/verify"
        body = serialize({"identity_name": options.id, "zkp_schema": options.schema})

    try:
        do_request(method, url, body)
    except OSError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(1) from None
    return 0