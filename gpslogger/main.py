#!/usr/bin/env python3
"""
GPS Logger - Main Entry Point

Usage:
    python -m gpslogger serve                    # Use ~/.gpslogger/config.yaml
    python -m gpslogger serve --config my.yaml   # Use custom config file
    python -m gpslogger show                     # Print stored logs
    python -m gpslogger export                   # Export logs to a file
    python -m gpslogger post                     # Post the current location
    python -m gpslogger settings --debug on      # Edit preferences

`serve` opens the logger screen: it resumes tracking if it was left on,
refreshes the log view every few seconds and serves the screen over
local HTTP until interrupted.
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path

from gpslogger.app import LoggerScreen
from gpslogger.common.config import DEFAULT_HOME, AppConfig, load_config_file
from gpslogger.common.exceptions import ConfigError, ExportError, StoreError
from gpslogger.common.logging_setup import configure_logging, get_service_logger
from gpslogger.common.state import (
    KEY_ACCESS_KEY,
    KEY_ACCESS_SECRET,
    KEY_CONSUMER_KEY,
    KEY_CONSUMER_SECRET,
    KEY_DEBUG_MODE,
)
from gpslogger.server import ScreenServer

logger = get_service_logger("main")

DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.yaml"


async def serve(config: AppConfig) -> None:
    """Run the screen and its HTTP front until SIGINT/SIGTERM."""
    screen = LoggerScreen.build(config)
    server = ScreenServer(screen, config.server)
    shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            signal.signal(sig, lambda s, f: shutdown_event.set())

    await screen.open()
    await server.start()
    try:
        await shutdown_event.wait()
        logger.info("Shutdown requested...")
    finally:
        await server.stop()
        await screen.close()


def cmd_show(config: AppConfig) -> int:
    screen = LoggerScreen.build(config)
    if not screen.reload():
        print("(no logs)")
        return 0
    print(screen.logs_text)
    return 0


def cmd_export(config: AppConfig) -> int:
    screen = LoggerScreen.build(config)
    try:
        record = screen.export()
    except ExportError as e:
        logger.error(str(e))
        return 1
    if record is None:
        print("Nothing to export")
        return 0
    print(record.path)
    return 0


def cmd_post(config: AppConfig) -> int:
    async def run() -> str:
        screen = LoggerScreen.build(config)
        outcome = await screen.post_location()
        # Let the delayed notification go out before the loop closes
        await asyncio.sleep(config.notification.delay_s + 0.5)
        return outcome.value

    print(asyncio.run(run()))
    return 0


def cmd_settings(config: AppConfig, args: argparse.Namespace) -> int:
    screen = LoggerScreen.build(config)
    values = {
        KEY_CONSUMER_KEY: args.consumer_key,
        KEY_CONSUMER_SECRET: args.consumer_secret,
        KEY_ACCESS_KEY: args.access_key,
        KEY_ACCESS_SECRET: args.access_secret,
    }
    if args.debug is not None:
        values[KEY_DEBUG_MODE] = args.debug == "on"

    try:
        current = screen.update_settings(values)
    except StoreError as e:
        logger.error(str(e))
        return 1

    for key, value in current.items():
        print(f"{key}: {value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpslogger",
        description="Personal GPS logger",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the logger screen over local HTTP")
    subparsers.add_parser("show", help="Print stored logs")
    subparsers.add_parser("export", help="Export stored logs to a text file")
    subparsers.add_parser("post", help="Post the current location")

    settings = subparsers.add_parser("settings", help="Show or edit preferences")
    settings.add_argument("--consumer-key")
    settings.add_argument("--consumer-secret")
    settings.add_argument("--access-key")
    settings.add_argument("--access-secret")
    settings.add_argument("--debug", choices=["on", "off"])

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config_file(Path(args.config))
    except ConfigError as e:
        logger.error(str(e))
        return 1

    configure_logging("DEBUG" if args.verbose else config.log_level, config.log_format)

    command = args.command or "serve"
    if command == "show":
        return cmd_show(config)
    if command == "export":
        return cmd_export(config)
    if command == "post":
        return cmd_post(config)
    if command == "settings":
        return cmd_settings(config, args)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        print("\nStopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
