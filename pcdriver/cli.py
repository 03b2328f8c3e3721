"""
PC Driver CLI - Read points, invoke services, print the thing specification

Command-line tool for exercising the driver locally.

Usage:
    # Read points
    python -m pcdriver read CpuRate Memory Battery

    # Invoke a service
    python -m pcdriver control Speak --input "hello"
    python -m pcdriver control Reboot --input 5

    # Print the thing specification
    python -m pcdriver spec

Output is JSON for easy parsing by other tools.
"""

import argparse
import json
import sys

from pcdriver.common.config import load_config
from pcdriver.common.exceptions import DriverError
from pcdriver.services.driver.service import PCDriver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcdriver",
        description="PC driver - read machine points and invoke services",
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    read_parser = subparsers.add_parser("read", help="Read points")
    read_parser.add_argument("points", nargs="*", help="Point names (e.g. CpuRate Memory)")

    control_parser = subparsers.add_parser("control", help="Invoke a service")
    control_parser.add_argument("name", help="Service name (Speak, Reboot)")
    control_parser.add_argument("--input", default="", help="Service input data")

    subparsers.add_parser("spec", help="Print the thing specification")

    return parser


def run(args: argparse.Namespace, driver: PCDriver) -> dict:
    """Execute one CLI command against a driver"""
    node = driver.open()
    try:
        if args.command == "read":
            return driver.read(node, args.points)
        if args.command == "control":
            result = driver.control(node, {"Name": args.name, "InputData": args.input})
            return {"result": result}
        return driver.get_specification().to_dict()
    finally:
        driver.close(node)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_config(args.config)
        if args.verbose:
            settings.log_level = "DEBUG"

        output = run(args, PCDriver(settings=settings))
    except DriverError as e:
        print(json.dumps({"error": e.message, "type": type(e).__name__}))
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
