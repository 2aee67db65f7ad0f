"""Entry point for the evaluation log middleware: send a record, run the demo, check health."""

import argparse
import logging
import sys
import time

from log_middleware.api_client import EvaluationApiClient
from log_middleware.config import build_config_parser, config_from_args
from log_middleware.history import LogHistory
from log_middleware.middleware import LoggingMiddleware
from log_middleware.models import Level, Package, Stack

logger = logging.getLogger(__name__)

DEMO_RECORDS = [
    (Stack.FRONTEND, Level.INFO, Package.API, "User logged into dashboard"),
    (Stack.FRONTEND, Level.DEBUG, Package.API, "API call initiated to /user/profile"),
    (Stack.BACKEND, Level.INFO, Package.DB, "Database connection established"),
    (Stack.BACKEND, Level.WARN, Package.CONTROLLER, "High response time detected: 2.5s"),
    (Stack.FRONTEND, Level.ERROR, Package.HANDLER, "Failed to parse user data"),
]


def run_demo(middleware: LoggingMiddleware, history: LogHistory, delay: float = 0.5) -> int:
    """Send DEMO_RECORDS one after another, recording each outcome in *history*.

    Returns the number of records the service accepted.
    """
    accepted = 0
    for i, (stack, level, package, message) in enumerate(DEMO_RECORDS):
        if i and delay > 0:
            time.sleep(delay)
        result = middleware.log(stack, level, package, message)
        history.add(stack, level, package, message, result.success)
        if result.success:
            accepted += 1
    logger.info("Demo finished: %d/%d records accepted", accepted, len(DEMO_RECORDS))
    return accepted


def _print_history(history: LogHistory):
    for entry in history.entries():
        status = "ok" if entry.success else "FAILED"
        print(
            f"{entry.timestamp} [{status}] {entry.stack.value}/{entry.level.value}/"
            f"{entry.package.value}: {entry.message}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluation Log Middleware", parents=[build_config_parser()]
    )
    commands = parser.add_subparsers(dest="command", required=True)

    send = commands.add_parser("send", help="Send a single log record")
    send.add_argument("--stack", choices=[s.value for s in Stack], default=Stack.FRONTEND.value)
    send.add_argument("--level", choices=[lv.value for lv in Level], default=Level.INFO.value)
    send.add_argument("--package", choices=[p.value for p in Package], default=Package.API.value)
    send.add_argument("--message", required=True)

    demo = commands.add_parser("demo", help="Run the predefined demo log sequence")
    demo.add_argument("--delay", type=float, default=0.5)

    commands.add_parser("health", help="Check that the evaluation service is reachable")
    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    logger.info("Using evaluation service at %s", config.base_url)

    if args.command == "health":
        with EvaluationApiClient(config.base_url, timeout=config.timeout) as api:
            healthy = api.test_connection()
        print("Service reachable" if healthy else "Service unreachable")
        return 0 if healthy else 1

    with LoggingMiddleware.from_config(config) as middleware:
        if args.command == "send":
            result = middleware.log(args.stack, args.level, args.package, args.message)
            if result.success:
                print("Log sent successfully")
                return 0
            print(f"Log failed: {result.message}")
            return 1

        history = LogHistory(config.history_size)
        accepted = run_demo(middleware, history, delay=args.delay)
        _print_history(history)
        return 0 if accepted == len(DEMO_RECORDS) else 1


if __name__ == "__main__":
    sys.exit(main())
