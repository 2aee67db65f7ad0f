"""Registration and authentication flows instrumented with the logging middleware."""

import logging

from log_middleware.api_client import (
    ApiResponse,
    AuthData,
    AuthResponse,
    EvaluationApiClient,
    RegistrationData,
    RegistrationResponse,
)
from log_middleware.middleware import LoggingMiddleware
from log_middleware.models import Package, Stack, SubmissionResult

logger = logging.getLogger(__name__)


def _check_logged(result: SubmissionResult, what: str):
    # A failed log call is only surfaced locally; re-logging it would recurse.
    if not result.success:
        logger.warning("Could not record %r: %s", what, result.message)


def _run(middleware: LoggingMiddleware, action: str, email: str, call) -> ApiResponse:
    attempt = f"{action} attempt"
    _check_logged(middleware.log_user_action(attempt, email), attempt)

    result = call()

    if result.success:
        done = f"{action} successful"
        _check_logged(middleware.log_user_action(done, email), done)
    else:
        message = f"{action} failed: {result.error}"
        _check_logged(middleware.error(Stack.FRONTEND, Package.API, message), message)
    return result


def register_user(
    api: EvaluationApiClient,
    middleware: LoggingMiddleware,
    registration: RegistrationData,
) -> ApiResponse[RegistrationResponse]:
    """Register a user, logging the attempt and its outcome."""
    return _run(
        middleware,
        "Registration",
        registration.email,
        lambda: api.register(registration),
    )


def authenticate_user(
    api: EvaluationApiClient,
    middleware: LoggingMiddleware,
    credentials: AuthData,
) -> ApiResponse[AuthResponse]:
    """Authenticate a user, logging the attempt and its outcome."""
    return _run(
        middleware,
        "Authentication",
        credentials.email,
        lambda: api.authenticate(credentials),
    )
