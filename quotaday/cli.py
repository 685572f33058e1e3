"""Command line entry point that starts the quote web server."""

from __future__ import annotations

import argparse
import logging
import sys
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIServer, make_server

from quotaday.api import Server

VERSION = "v0.0.0"
GIT_COMMIT = ""

log = logging.getLogger(__name__)


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def version_string(version: str = VERSION, git_commit: str = GIT_COMMIT) -> str:
    """Return the version with the abbreviated commit appended."""
    return f"{version}+{git_commit[:7]}"


def _uint(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command."""
    parser = argparse.ArgumentParser(
        prog="quotaday", description="start Quotaday webserver"
    )
    parser.add_argument(
        "-p", "--port", type=_uint, default=80, help="port to listen to"
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("version", help="print the version and exit")
    return parser


def serve(port: int) -> None:
    """Serve quotations on all interfaces until interrupted."""
    log.info("Starting Quotaday %s on port :%d", version_string(), port)
    with make_server(
        "0.0.0.0", port, Server(), server_class=_ThreadingWSGIServer
    ) as httpd:
        httpd.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the command; return the process exit status."""
    args = build_parser().parse_args(argv)
    if args.command == "version":
        print(version_string())
        return 0

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        serve(args.port)
    except KeyboardInterrupt:
        return 0
    except (OSError, OverflowError) as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())