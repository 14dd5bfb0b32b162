"""CLI entry point for the AxeOS device monitor.

Commands:
  status     Hashrate, temperatures, power and uptime as labelled lines
  dashboard  Raw statistics JSON from the dashboard endpoint
  restart    Reboot the device firmware (no configuration change)

Examples:
  axectl --host 192.168.1.50 status
  BITAXE_URL=http://192.168.1.50 axectl dashboard
  axectl --host 192.168.1.50 --timeout 2 restart
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from tabulate import tabulate

from axectl import __version__, configure_logging
from axectl.config import ENV_HOST, ENV_TIMEOUT, Settings, resolve_settings
from axectl.exceptions import AxeError
from axectl.formatters import DashboardFormatter, StatusFormatter
from axectl.models import decode_json, decode_telemetry
from axectl.transport import API_DASHBOARD, API_RESTART, API_SYSTEM_INFO, AxeOSTransport


def cmd_status(transport: AxeOSTransport, args: argparse.Namespace) -> None:
    """Fetch, decode and print device telemetry."""
    reading = decode_telemetry(transport.fetch(API_SYSTEM_INFO))
    formatter = StatusFormatter(reading)
    print(formatter.format_json() if args.json else formatter.format())


def cmd_dashboard(transport: AxeOSTransport, args: argparse.Namespace) -> None:
    """Fetch the dashboard statistics and print them as JSON."""
    payload = decode_json(transport.fetch(API_DASHBOARD))
    print(DashboardFormatter(payload).format())


def cmd_restart(transport: AxeOSTransport, args: argparse.Namespace) -> None:
    """Ask the device to reboot."""
    transport.send(API_RESTART)
    print(f"Restart command sent to {transport.base_url}")


COMMANDS = {
    "status": cmd_status,
    "dashboard": cmd_dashboard,
    "restart": cmd_restart,
}


def _print_startup_banner(settings: Settings) -> None:
    rows = [
        ["version", __version__],
        ["device", settings.base_url],
        ["timeout", f"{settings.timeout}s"],
    ]
    logger.opt(raw=True).debug("\n{}\n", tabulate(rows, tablefmt="mixed_grid"))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="axectl",
        description="AxeOS miner monitor: read telemetry and restart the device",
    )
    parser.add_argument(
        "--host",
        help=f"Device URL or address, e.g. http://192.168.1.50 (env: {ENV_HOST})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help=f"Connect/read timeout in seconds (default: 5, env: {ENV_TIMEOUT})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: ~/.config/axectl/config.toml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    status = subparsers.add_parser("status", help="Show device telemetry")
    status.add_argument("--json", action="store_true", help="Print the decoded reading as JSON")

    subparsers.add_parser("dashboard", help="Dump dashboard statistics as JSON")
    subparsers.add_parser("restart", help="Restart the device")

    return parser


def main(args: list[str] | None = None) -> None:
    """Main entry point for the axectl CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)

    configure_logging("DEBUG" if parsed.verbose else "WARNING")

    try:
        settings = resolve_settings(parsed.host, parsed.timeout, parsed.config)
        _print_startup_banner(settings)
        with AxeOSTransport(settings.base_url, timeout=settings.timeout) as transport:
            COMMANDS[parsed.command](transport, parsed)
    except AxeError as e:
        logger.opt(exception=e).debug(f"{parsed.command} failed")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
