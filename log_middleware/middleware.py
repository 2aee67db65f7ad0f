"""Logging middleware: the public log / log_user_action / error operations."""

import logging

import httpx

from log_middleware.config import MiddlewareConfig
from log_middleware.models import Level, Package, Stack, SubmissionResult
from log_middleware.transport import LogTransportClient
from log_middleware.validator import LogValidator

logger = logging.getLogger(__name__)


class LoggingMiddleware:
    """Validates log calls and hands accepted records to the transport.

    Every operation returns a SubmissionResult and none of them raise for
    validation or delivery failures. Failures are reported to this module's
    standard logger only, never back through the middleware, so a caller
    reporting a failed ``error()`` call elsewhere cannot recurse into it.

    One instance is built per process (see ``from_config``) and passed to the
    code that needs it.
    """

    def __init__(
        self,
        transport: LogTransportClient,
        validator: LogValidator | None = None,
        default_stack: Stack = Stack.FRONTEND,
        default_package: Package = Package.API,
    ):
        self._transport = transport
        self._validator = validator if validator is not None else LogValidator()
        self._default_stack = Stack(default_stack)
        self._default_package = Package(default_package)

    @classmethod
    def from_config(
        cls, config: MiddlewareConfig, http_client: httpx.Client | None = None
    ) -> "LoggingMiddleware":
        transport = LogTransportClient(
            config.base_url,
            logs_path=config.logs_path,
            timeout=config.timeout,
            http_client=http_client,
        )
        return cls(
            transport,
            default_stack=config.default_stack,
            default_package=config.default_package,
        )

    @property
    def default_stack(self) -> Stack:
        return self._default_stack

    @property
    def default_package(self) -> Package:
        return self._default_package

    def log(self, stack, level, package, message) -> SubmissionResult:
        """Validate and submit one record.

        Invalid input is rejected before any network call is made.
        """
        record, failure = self._validator.validate(stack, level, package, message)
        if failure is not None:
            logger.warning("Rejected log record: %s", failure.message)
            return failure
        return self._transport.submit(record)

    def log_user_action(self, description: str, identifier: str) -> SubmissionResult:
        """Record a user-initiated event, e.g. ("Authentication attempt", email)."""
        return self.log(
            self._default_stack,
            Level.INFO,
            self._default_package,
            f"{description}: {identifier}",
        )

    def error(self, stack, package, message) -> SubmissionResult:
        """Report a failure the caller just observed, at error level."""
        return self.log(stack, Level.ERROR, package, message)

    def close(self):
        self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
