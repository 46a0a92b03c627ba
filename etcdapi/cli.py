"""
Command-line front end.

    etcdapi -s 10.0.0.1:4001 -s 10.0.0.2:4001 get config/mode
    etcdapi set config/mode active --prev-value standby --ttl 60
    etcdapi delete config/mode
    etcdapi leader
"""

import argparse
import logging
import sys
from typing import List, Optional

from etcdapi.config import ClientSettings, get_settings, setup_logging
from etcdapi.exceptions import EtcdApiError
from etcdapi.models import OperationResult
from etcdapi.session import open_session

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "127.0.0.1:4001"

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_PROTOCOL_ERROR = 2
EXIT_UNKNOWN = 3

RESULT_EXIT_CODES = {
    OperationResult.SUCCESS: EXIT_OK,
    OperationResult.PROTOCOL_ERROR: EXIT_PROTOCOL_ERROR,
    OperationResult.TRANSPORT_OR_UNKNOWN_ERROR: EXIT_UNKNOWN,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etcdapi",
        description="Query an etcd v1 cluster with failover across servers",
    )
    parser.add_argument(
        "-s", "--server",
        action="append",
        dest="servers",
        metavar="HOST:PORT",
        help=f"Candidate server, repeat in failover order (default: {DEFAULT_SERVER})",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every attempt")

    sub = parser.add_subparsers(dest="command", required=True)

    get_p = sub.add_parser("get", help="Read a key")
    get_p.add_argument("key")

    set_p = sub.add_parser("set", help="Write a key")
    set_p.add_argument("key")
    set_p.add_argument("value")
    set_p.add_argument("--prev-value", dest="precondition", help="Only write if the current value matches")
    set_p.add_argument("--ttl", type=int, default=0, help="Expiry in seconds")

    del_p = sub.add_parser("delete", help="Delete a key")
    del_p.add_argument("key")

    sub.add_parser("leader", help="Show the current leader")

    return parser


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.timeout is not None:
        settings = ClientSettings(
            http_timeout=args.timeout,
            follow_redirects=settings.follow_redirects,
            log_level=settings.log_level,
        )

    with open_session(args.servers or [DEFAULT_SERVER], settings) as session:
        if args.command in ("get", "leader"):
            value = session.get(args.key) if args.command == "get" else session.leader()
            if value is None:
                print("not found", file=sys.stderr)
                return EXIT_NOT_FOUND
            print(value)
            return EXIT_OK

        if args.command == "set":
            result = session.set(args.key, args.value, args.precondition, args.ttl)
        else:
            result = session.delete(args.key)
        print(result.value)
        return RESULT_EXIT_CODES[result]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # stdout carries the command's result
    setup_logging("DEBUG" if args.verbose else get_settings().log_level, stream=sys.stderr)

    try:
        return run(args)
    except EtcdApiError as e:
        logger.error(e.message)
        parser.exit(EXIT_UNKNOWN, f"etcdapi: error: {e.message}\n")


if __name__ == "__main__":
    sys.exit(main())
