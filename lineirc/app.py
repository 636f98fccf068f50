"""Command line entry point for the lineirc client."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config import ClientConfig, load_config
from .errors.handling import log_error
from .errors.internal import ConfigError, NetworkError
from .irc.client import IRCClient
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lineirc",
        description="Minimal IRC client: type raw protocol lines, see server lines.",
    )
    parser.add_argument("--config", help="JSON config file (default: $LINEIRC_CONF_FILE or lineirc.conf)")
    parser.add_argument("--host", help="Server address")
    parser.add_argument("--port", type=int, help="Server port")
    parser.add_argument("--nick", help="Nickname")
    parser.add_argument("--username", help="Username for USER")
    parser.add_argument("--realname", help="Real name for USER")
    parser.add_argument("--password", help="Connection password sent with PASS")
    return parser


def config_from_args(args: argparse.Namespace) -> ClientConfig:
    overrides = {
        "host": args.host,
        "port": args.port,
        "nick": args.nick,
        "username": args.username,
        "realname": args.realname,
        "password": args.password,
    }
    return load_config(args.config, overrides)


async def main(config: ClientConfig) -> None:
    """Run one client session."""
    logger.log_event("app", "start", server=config.host, port=config.port)
    client = IRCClient(config)
    try:
        await client.run_session()
    finally:
        logger.log_event("app", "shutdown")


def cli(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerConfigurator().configure()
    try:
        config = config_from_args(args)
    except ConfigError as e:
        log_error("Configuration error", e)
        return 1

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        return 0
    except (NetworkError, OSError) as e:
        log_error("Connection error", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(cli())
