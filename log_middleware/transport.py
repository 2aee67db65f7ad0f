"""Log transport client: one HTTP POST per record, failures returned as values."""

import json
import logging

import httpx

from log_middleware.models import LogRecord, SubmissionResult, record_to_dict

logger = logging.getLogger(__name__)


def _encode(payload: dict) -> bytes:
    # ASCII-escaped JSON, so lone surrogates in a str cannot fail utf-8 encoding
    return json.dumps(payload).encode("ascii")


class LogTransportClient:
    """Ships validated LogRecords to ``<base_url><logs_path>``.

    ``submit`` never raises for HTTP or network failures: a non-2xx status or
    any ``httpx.HTTPError`` is turned into a failed SubmissionResult. There is
    no retry and no buffering, each call is exactly one round trip.

    The timeout applies to the client as a whole and is fixed at construction.
    Pass ``http_client`` to reuse an existing ``httpx.Client`` (tests inject
    one backed by ``httpx.MockTransport``); it is then left open by ``close``.
    """

    def __init__(
        self,
        base_url: str,
        logs_path: str = "/logs",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self._url = base_url.rstrip("/") + logs_path
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @property
    def url(self) -> str:
        return self._url

    def submit(self, record: LogRecord) -> SubmissionResult:
        """Send one record and report the outcome."""
        payload = record_to_dict(record)
        try:
            response = self._client.post(
                self._url,
                content=_encode(payload),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            detail = str(exc) or type(exc).__name__
            logger.warning("Log submission to %s failed: %s", self._url, detail)
            return SubmissionResult.failure(detail)

        if not response.is_success:
            detail = f"{response.status_code} - {response.text}"
            logger.warning("Log service rejected %s record: %s", record.level.value, detail)
            return SubmissionResult.failure(detail)

        logger.debug(
            "Sent %s/%s/%s record (status %d)",
            record.stack.value,
            record.level.value,
            record.package.value,
            response.status_code,
        )
        return SubmissionResult.ok()

    def close(self):
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
