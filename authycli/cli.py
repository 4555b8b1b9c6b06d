"""Command line entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .device import Device, DeviceConfig, DeviceNotRegisteredError
from .search import Searcher

VERSION = "0.1.0"


def _run_account(args: argparse.Namespace) -> str | None:
    password = args.password or str()
    device = Device(
        DeviceConfig(
            country_code=args.countrycode,
            mobile=args.mobilenumber,
            password=password,
        )
    )
    return f"{device.registration!r} "


def _run_delpwd(args: argparse.Namespace) -> str | None:
    Device(DeviceConfig()).delete_main_password()
    return None


def _run_fuzz(args: argparse.Namespace) -> str | None:
    searcher = Searcher(args.keyword or "", args.alfred > 0, Device(DeviceConfig()))
    return searcher.search()


def _run_version(args: argparse.Namespace) -> str | None:
    return f"Current version {VERSION}"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(prog="authy", description="Authy command line tool")
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command", metavar="command")

    account_cmd = commands.add_parser(
        "account",
        help="Authy account info or register device",
        description="Show registered account info. Can specify country code, "
        "mobile number and authy main password.",
    )
    account_cmd.add_argument(
        "-c", "--countrycode", default="",
        help="phone number country code (e.g. 1 for United States), digitals only",
    )
    account_cmd.add_argument("-m", "--mobilenumber", default="", help="phone number, digitals only")
    account_cmd.add_argument("-p", "--password", help="authy main password")
    account_cmd.set_defaults(handler=_run_account)

    delete_cmd = commands.add_parser(
        "delpwd",
        help="Delete saved backup password",
        description="Delete saved backup password. Another way to reset backup password.",
    )
    delete_cmd.set_defaults(handler=_run_delpwd)

    fuzz_cmd = commands.add_parser(
        "fuzz",
        help="Fuzzy search your otp tokens(case-insensitive)",
        description="Fuzzy search your otp tokens(case-insensitive)",
    )
    fuzz_cmd.add_argument("keyword", nargs="?", default="")
    fuzz_cmd.add_argument(
        "-a", "--alfred", action="count", default=0, help="Specify Output Mode AlfredWorkflow"
    )
    fuzz_cmd.set_defaults(handler=_run_fuzz)

    version_cmd = commands.add_parser("version", help="Show current version")
    version_cmd.set_defaults(handler=_run_version)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the chosen command and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    try:
        text = handler(args)
    except (DeviceNotRegisteredError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    if text is not None:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())