"""
discovery-ec2 CLI - inspect the EC2 connection parameters a settings file resolves to

Usage:
    discovery-ec2 resolve settings.yaml
    discovery-ec2 resolve base.yaml override.yaml --format json
    discovery-ec2 endpoint settings.yaml
    discovery-ec2 check settings.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from discovery_ec2 import __version__
from discovery_ec2.configuration import build_configuration
from discovery_ec2.credentials import StaticCredentialsProvider, build_credentials
from discovery_ec2.endpoint import find_endpoint, find_region
from discovery_ec2.errors import DiscoveryEc2Error
from discovery_ec2.settings import Settings

REDACTED = "[REDACTED]"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="discovery-ec2",
        description="Resolve EC2 credentials, client configuration and endpoint from settings",
    )
    parser.add_argument("--version", action="version", version=f"discovery-ec2 {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log resolution decisions to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve", help="Print the resolved connection parameters"
    )
    resolve_parser.add_argument(
        "files", nargs="+", type=Path, help="Settings file(s), later files override earlier ones"
    )
    resolve_parser.add_argument(
        "--no-redact", action="store_true", help="Don't redact secrets (use with caution)"
    )
    resolve_parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (default: text)",
    )

    # endpoint command
    endpoint_parser = subparsers.add_parser("endpoint", help="Print the resolved EC2 endpoint")
    endpoint_parser.add_argument("files", nargs="+", type=Path, help="Settings file(s)")

    # check command
    check_parser = subparsers.add_parser("check", help="Quick syntax check of settings files")
    check_parser.add_argument("files", nargs="+", type=Path, help="Settings file(s) to check")

    return parser


def load_settings(files: list[Path]) -> Settings:
    """Load settings from one or more files."""
    if len(files) == 1:
        return Settings.load(files[0])
    else:
        return Settings.load_merged(files)


def describe(settings: Settings, redact: bool = True) -> dict[str, Any]:
    """Resolve everything and return it as a plain dict for output."""

    def secret(value: Any) -> Any:
        if value is None or not redact:
            return value
        return REDACTED

    configuration = build_configuration(settings)
    provider = build_credentials(settings)

    if isinstance(provider, StaticCredentialsProvider):
        credentials = provider.get_credentials()
        credentials_info = {
            "source": "settings",
            "access_key": credentials.access_key,
            "secret_key": secret(credentials.secret_key),
        }
    else:
        credentials_info = {"source": "default-chain"}

    return {
        "credentials": credentials_info,
        "protocol": configuration.protocol.value,
        "proxy": {
            "host": configuration.proxy_host,
            "port": configuration.proxy_port,
            "username": configuration.proxy_username,
            "password": secret(configuration.proxy_password),
        },
        "signer": configuration.signer_override,
        "read_timeout": configuration.read_timeout,
        "region": find_region(settings),
        "endpoint": find_endpoint(settings),
    }


def _print_text(data: dict[str, Any], prefix: str = "") -> None:
    for key, value in data.items():
        if isinstance(value, dict):
            _print_text(value, f"{prefix}{key}.")
        elif value is None:
            print(f"{prefix}{key}: null")
        else:
            print(f"{prefix}{key}: {value}")


def cmd_resolve(files: list[Path], no_redact: bool, output_format: str) -> int:
    """Print the resolved connection parameters."""
    try:
        settings = load_settings(files)
    except (OSError, DiscoveryEc2Error) as e:
        print(f"\033[91mFailed to load settings: {e}\033[0m", file=sys.stderr)
        return 2

    try:
        data = describe(settings, redact=not no_redact)
    except DiscoveryEc2Error as e:
        print(f"\033[91mError: {e}\033[0m", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps(data, indent=2))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")
    else:
        _print_text(data)
    return 0


def cmd_endpoint(files: list[Path]) -> int:
    """Print the resolved EC2 endpoint, or null when the SDK default applies."""
    try:
        settings = load_settings(files)
    except (OSError, DiscoveryEc2Error) as e:
        print(f"\033[91mFailed to load settings: {e}\033[0m", file=sys.stderr)
        return 2

    try:
        endpoint = find_endpoint(settings)
    except DiscoveryEc2Error as e:
        print(f"\033[91mError: {e}\033[0m", file=sys.stderr)
        return 1

    print(endpoint if endpoint is not None else "null")
    return 0


def cmd_check(files: list[Path]) -> int:
    """Quick syntax check for settings files."""
    all_valid = True

    for file in files:
        try:
            settings = Settings.load(file)
            print(f"\033[92m✓\033[0m {file}: {len(settings)} setting(s)")

        except DiscoveryEc2Error as e:
            print(f"\033[91m✗\033[0m {file}: {e}", file=sys.stderr)
            all_valid = False
        except FileNotFoundError:
            print(f"\033[91m✗\033[0m {file}: File not found", file=sys.stderr)
            all_valid = False
        except OSError as e:
            print(f"\033[91m✗\033[0m {file}: {e.strerror or e}", file=sys.stderr)
            all_valid = False

    return 0 if all_valid else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )

    if args.command == "resolve":
        return cmd_resolve(args.files, args.no_redact, args.format)
    elif args.command == "endpoint":
        return cmd_endpoint(args.files)
    elif args.command == "check":
        return cmd_check(args.files)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
