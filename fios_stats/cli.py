"""
Command-line interface for the Fios G1000 stats retriever.

Provides argument parsing and main execution flow.
"""

import argparse
import getpass
import sys
import time

from fios_stats.config import (
    DEFAULT_HOST,
    DEFAULT_INFLUXDB_URI,
    DEFAULT_INTERVAL,
    DEFAULT_PAGES,
    DEFAULT_PASSWORD,
    PAGES,
)
from fios_stats.logging_setup import log, setup_logging
from fios_stats.models import Credentials
from fios_stats.network import build_session
from fios_stats.pipeline import EXIT_OK, run_once
from fios_stats.sink import InfluxSink, StdoutSink


def parse_args(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="fios-stats",
        description="Fios Quantum G1000 stats retriever – logs into the router, "
                    "reads its network statistics and prints them or sends "
                    "them to InfluxDB.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Password can also be provided via the ROUTER_PASSWORD env var.\n"
            "If the password is not supplied and not in the environment, "
            "you will be prompted for it."
        ),
    )
    parser.add_argument(
        "-p", "--password", default=DEFAULT_PASSWORD,
        help="Password for router (overrides ROUTER_PASSWORD env var)",
    )
    parser.add_argument(
        "-i", "--influxdb", metavar="URI", default=DEFAULT_INFLUXDB_URI,
        help="InfluxDB write URI including database name; "
             "without it metrics are printed to stdout",
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST,
        help=f"Router hostname or IP address (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--page", dest="pages", action="append", choices=sorted(PAGES),
        help=f"Stats page to read, repeatable (default: {', '.join(DEFAULT_PAGES)})",
    )
    parser.add_argument(
        "--verify-ssl", action="store_true", default=False,
        help="Verify the router's TLS certificate (it is usually self-signed)",
    )
    parser.add_argument(
        "--interval", type=float, default=DEFAULT_INTERVAL, metavar="SECONDS",
        help="Poll repeatedly with this delay; 0 polls once (default)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    args = parser.parse_args(argv)
    if args.interval < 0:
        parser.error("--interval must not be negative")
    # Keep order, drop repeats
    args.pages = list(dict.fromkeys(args.pages or DEFAULT_PAGES))
    return args


def main(argv=None) -> int:
    """
    Main entry point for the stats retriever CLI.
    """
    args = parse_args(argv)

    setup_logging(debug=args.debug)

    if not args.password:
        args.password = getpass.getpass("Router password: ")
    credentials = Credentials(password=args.password)

    http = build_session(verify_ssl=args.verify_ssl)

    if args.influxdb:
        sink = InfluxSink(args.influxdb, build_session(verify_ssl=True), host_tag=args.host)
    else:
        sink = StdoutSink()

    if not args.interval:
        return run_once(http, credentials, args.host, sink, args.pages)

    log.info("Polling %s every %s s (Ctrl+C to stop)", args.host, args.interval)
    try:
        while True:
            # A fresh transport per cycle so no cookie outlives its poll
            code = run_once(build_session(verify_ssl=args.verify_ssl),
                            credentials, args.host, sink, args.pages)
            if code != EXIT_OK:
                log.warning("Poll failed; retrying in %s s", args.interval)
            time.sleep(args.interval)
    except KeyboardInterrupt:
        log.info("Interrupted, exiting.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
