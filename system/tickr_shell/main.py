#!/usr/bin/env python3
"""CLI entry point for TickrShell.

Builds the configuration, opens the bus to the DataService and runs the
interactive session until the user exits.
"""

import argparse
import sys

from infrastructure.logging.logger import configure_logging, get_logger
from system.tickr_shell.adapters.redis.bus import RedisBus
from system.tickr_shell.adapters.zmq.bus import ZmqBus
from system.tickr_shell.config import TickrShellConfig
from system.tickr_shell.session.engine import SessionEngine


def parse_args(argv=None):
    """Parse command-line arguments.

    Anything not given on the command line falls back to TICKR_* and the
    transport-specific environment variables.
    """
    parser = argparse.ArgumentParser(
        prog="tickrshell",
        description="Interactive terminal client for live stock quotes",
    )
    parser.add_argument(
        "--transport",
        choices=["zmq", "redis"],
        default=None,
        help="Message bus to the DataService (default: zmq, or TICKR_TRANSPORT env var)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: WARNING, or TICKR_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--currency",
        default=None,
        help="Initial display currency (default: USD, or TICKR_DISPLAY_CURRENCY env var)",
    )
    parser.add_argument(
        "--no-banner", action="store_true", help="Do not print the welcome banner"
    )
    return parser.parse_args(argv)


def build_config(args) -> TickrShellConfig:
    overrides = {}
    if args.transport:
        overrides["transport"] = args.transport
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.currency:
        overrides["display_currency"] = args.currency
    return TickrShellConfig(**overrides)


def build_bus(config: TickrShellConfig):
    """Open the bus selected by ``config.transport``."""
    if config.transport == "redis":
        return RedisBus(
            namespace=config.redis_namespace,
            config=config.redis,
            receive_timeout=config.receive_timeout,
        )
    return ZmqBus(config=config.zmq)


def main(argv=None):
    """Run one TickrShell session.

    Returns:
        Exit code: 0 on normal termination, 1 if an error escaped the session.
    """
    args = parse_args(argv)
    logger = get_logger("TickrShellMain")

    bus = None
    try:
        config = build_config(args)
        configure_logging(config.log_level)

        bus = build_bus(config)
        engine = SessionEngine(bus, config=config)
        if not args.no_banner:
            engine.print_banner()
        engine.run()
    except KeyboardInterrupt:
        logger.debug("Interrupted")
    except Exception as e:
        logger.debug("Fatal error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if bus is not None:
            bus.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
