"""
Main commands for the ztcentral CLI.
"""
import argparse
import logging
import sys
from typing import List, Optional

from ztcentral.client import Client
from ztcentral.cli.utils import print_colored
from ztcentral.config.manager import ConfigError, load_config
from ztcentral.core.common import __version__
from ztcentral.network.cancel import CancellationToken
from ztcentral.network.errors import APIError
from ztcentral.utils.logging import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ztcentral", description="ZeroTier Central API client")
    parser.add_argument("--version", action="store_true", help="Show the client version")
    parser.add_argument("--token", help="API token (defaults to ZEROTIER_CENTRAL_TOKEN)")
    parser.add_argument("--api-url", help="API base URL")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--deadline", type=float, help="Overall deadline for the command in seconds")
    parser.add_argument("--max-attempts", type=int, help="Attempts for idempotent requests")
    parser.add_argument("--backoff-base", type=float, help="First retry delay in seconds, doubled per attempt")
    parser.add_argument("--backoff-cap", type=float, help="Longest retry delay in seconds")
    parser.add_argument("--pace", action="store_true", default=None, help="Pace requests as the rate limit drains")
    parser.add_argument("--user-agent", help="Identifier appended to the user agent")
    parser.add_argument("--status", action="store_true", help="Show the account behind the token")
    parser.add_argument("--members", metavar="NETWORK_ID", help="List the members of one network")
    parser.add_argument("--no-members", action="store_true", help="List networks without their members")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log output")
    return parser


def show_status(client: Client, cancel: CancellationToken) -> None:
    status = client.status(cancel=cancel)
    user = status.user
    print(f"API version:\t{status.api_version or '-'}")
    print(f"Read-only mode:\t{bool(status.read_only_mode)}")
    if user is not None:
        print(f"User:\t\t{user.display_name or '-'} <{user.email or '-'}> ({user.id})")


def show_members(client: Client, network_id: str, cancel: CancellationToken, indent: str = "") -> None:
    for member in client.get_members(network_id, cancel=cancel):
        print(f"{indent}{member.member_id}\t {member.name or ''}")


def show_networks(client: Client, cancel: CancellationToken, with_members: bool = True) -> None:
    for network in client.get_networks(cancel=cancel):
        name = network.config.name if network.config is not None else ""
        print(f"{network.network_id}\t{name or ''}")
        if with_members and network.network_id:
            show_members(client, network.network_id, cancel, indent="\t")


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ztcentral CLI.

    Args:
        argv: List of command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, other value for error)
    """
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"ztcentral version {__version__}")
        return 0

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    setup_logger(level=level)

    try:
        config = load_config(
            args.token,
            base_url=args.api_url,
            timeout=args.timeout,
            max_attempts=args.max_attempts,
            backoff_base=args.backoff_base,
            backoff_cap=args.backoff_cap,
            pacing=args.pace,
            user_agent=args.user_agent,
        )
    except ConfigError as e:
        print_colored(f"Configuration error: {e}", "red", file=sys.stderr)
        return 2

    cancel = CancellationToken(timeout=args.deadline)
    try:
        with Client.from_config(config) as client:
            if args.status:
                show_status(client, cancel)
            elif args.members:
                show_members(client, args.members, cancel)
            else:
                show_networks(client, cancel, with_members=not args.no_members)
    except APIError as e:
        print_colored(f"error: {e}", "red", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        cancel.cancel()
        print_colored("Interrupted", "yellow", file=sys.stderr)
        return 130

    return 0
