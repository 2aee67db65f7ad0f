"""Configuration module: frozen dataclass loaded from environment variables and CLI args."""

import argparse
import os
from dataclasses import dataclass

from log_middleware.models import Package, Stack


@dataclass(frozen=True)
class MiddlewareConfig:
    base_url: str = "http://20.244.56.144/evaluation-service"
    logs_path: str = "/logs"
    timeout: float = 10.0
    default_stack: Stack = Stack.FRONTEND
    default_package: Package = Package.API
    history_size: int = 50

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "default_stack", Stack(self.default_stack))
        object.__setattr__(self, "default_package", Package(self.default_package))


def build_config_parser() -> argparse.ArgumentParser:
    """Return a parser holding only the config flags, usable as an argparse parent."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--base-url", type=str, default=None)
    parser.add_argument("--logs-path", type=str, default=None)
    parser.add_argument("--timeout", type=float, default=None)
    parser.add_argument("--default-stack", type=str, default=None)
    parser.add_argument("--default-package", type=str, default=None)
    parser.add_argument("--history-size", type=int, default=None)
    return parser


def config_from_args(args: argparse.Namespace) -> MiddlewareConfig:
    """Build MiddlewareConfig from defaults <- env vars <- parsed CLI args (highest priority).

    Raises ValueError when the default stack or package is outside its closed set.
    """
    env_base_url = os.environ.get("EVAL_BASE_URL", MiddlewareConfig.base_url)
    env_logs_path = os.environ.get("EVAL_LOGS_PATH", MiddlewareConfig.logs_path)
    env_timeout = float(os.environ.get("EVAL_TIMEOUT", MiddlewareConfig.timeout))
    env_default_stack = os.environ.get("DEFAULT_STACK", MiddlewareConfig.default_stack.value)
    env_default_package = os.environ.get(
        "DEFAULT_PACKAGE", MiddlewareConfig.default_package.value
    )
    env_history_size = int(os.environ.get("HISTORY_SIZE", MiddlewareConfig.history_size))

    return MiddlewareConfig(
        base_url=args.base_url if args.base_url is not None else env_base_url,
        logs_path=args.logs_path if args.logs_path is not None else env_logs_path,
        timeout=args.timeout if args.timeout is not None else env_timeout,
        default_stack=args.default_stack if args.default_stack is not None else env_default_stack,
        default_package=(
            args.default_package if args.default_package is not None else env_default_package
        ),
        history_size=args.history_size if args.history_size is not None else env_history_size,
    )


def load_config(argv=None) -> MiddlewareConfig:
    """Parse config flags out of argv, ignoring anything else.

    Pass argv for testability; when None, argparse reads sys.argv.
    """
    args, _unknown = build_config_parser().parse_known_args(argv)
    return config_from_args(args)
