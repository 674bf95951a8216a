#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Command-line interface for the Spark API client.

Runs one client operation and writes its result as JSON to stdout or a file.
"""

import sys
import json
import logging
import argparse
from typing import Any, List, Optional

from spark_client import __version__
from spark_client.api.client import SparkClient
from spark_client.api.transport import SparkAPIError
from spark_client.config import AppConfig
from spark_client.utils.logger import configure_logging


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="spark-client",
        description="Spark inventory/CRM API client",
        epilog="Reads SPARK_API_KEY and other settings from the environment or a .env file.",
    )

    parser.add_argument(
        "command",
        choices=[
            "units",
            "units-details",
            "countries",
            "brokerage",
            "submit-contact",
            "check-config",
        ],
        help="Command to execute",
    )

    parser.add_argument(
        "--name",
        type=str,
        help="Brokerage name (brokerage command)",
    )
    parser.add_argument(
        "--file",
        type=str,
        help="JSON file with the contact payload (submit-contact command)",
    )
    parser.add_argument(
        "--no-sanitize",
        action="store_true",
        help="Submit the contact payload unchanged",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Write JSON output to this file instead of stdout",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a resource cannot be fetched instead of returning empty data",
    )

    # Common options
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Format logs as JSON",
    )
    parser.add_argument(
        "--log-rotation",
        type=str,
        choices=["size", "daily", "none"],
        help="How the log file is rotated (default: LOG_ROTATION or size)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def write_output(data: Any, output: Optional[str] = None) -> None:
    """
    Write data as indented JSON.

    Args:
        data: JSON-serialisable data
        output: File path, or None for stdout
    """
    text = json.dumps(data, indent=2, default=str)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)


def run_command(client: SparkClient, args: argparse.Namespace) -> int:
    """
    Execute a client command.

    Args:
        client: Configured Spark client
        args: Parsed command-line arguments

    Returns:
        int: Process exit code
    """
    logger = logging.getLogger(__name__)

    if args.command == "units":
        units = client.get_units()
        write_output({str(key): unit.model_dump() for key, unit in units.items()}, args.output)
    elif args.command == "units-details":
        units = client.get_units_with_details()
        write_output({str(key): unit.to_flat_dict() for key, unit in units.items()}, args.output)
    elif args.command == "countries":
        write_output([country.model_dump() for country in client.get_countries()], args.output)
    elif args.command == "brokerage":
        if not args.name:
            logger.error("--name is required for the brokerage command")
            return 2
        write_output(client.get_brokerage(args.name).model_dump(), args.output)
    elif args.command == "submit-contact":
        if not args.file:
            logger.error("--file is required for the submit-contact command")
            return 2
        with open(args.file, "r", encoding="utf-8") as f:
            payload = json.load(f)
        result = client.post_contact(payload, sanitize=False if args.no_sanitize else None)
        write_output(result.model_dump(), args.output)
        return 0 if result.ok else 1
    else:
        logger.error(f"Unknown command: {args.command}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        int: Exit code
    """
    parser = setup_argparse()
    args = parser.parse_args(argv)

    config = AppConfig()
    if args.log_level:
        config.log_level = getattr(logging, args.log_level)
    if args.strict:
        config.strict_fetch = True
    if args.log_rotation:
        config.log_rotation = args.log_rotation

    logger = configure_logging(
        level=config.log_level,
        log_file=args.log_file or (str(config.log_file_path) if config.log_file_path else None),
        json_logs=args.json_logs or config.json_logs,
        rotation=config.log_rotation,
        max_bytes=config.log_max_bytes,
        backup_count=config.log_backup_count,
    )

    errors = config.validate()
    if args.command == "check-config":
        for error in errors:
            print(f"Configuration error: {error}")
        if not errors:
            print("Configuration OK")
        return 1 if errors else 0

    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        return 1

    try:
        with SparkClient(config) as client:
            return run_command(client, args)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 130  # Standard exit code for SIGINT
    except SparkAPIError as e:
        logger.error(f"Spark API error: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
