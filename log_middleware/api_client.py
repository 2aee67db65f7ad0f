"""Evaluation service API client: registration, authentication and health check."""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RegistrationData:
    email: str
    name: str
    mobile_no: str
    github_username: str
    roll_no: str
    access_code: str

    def to_payload(self) -> dict:
        return {
            "email": self.email,
            "name": self.name,
            "mobileNo": self.mobile_no,
            "githubUsername": self.github_username,
            "rollNo": self.roll_no,
            "accessCode": self.access_code,
        }


@dataclass(frozen=True)
class RegistrationResponse:
    email: str
    name: str
    roll_no: str
    access_code: str
    client_id: str
    client_secret: str

    @classmethod
    def from_dict(cls, data: dict) -> "RegistrationResponse":
        return cls(
            email=data["email"],
            name=data["name"],
            roll_no=data["rollNo"],
            access_code=data["accessCode"],
            client_id=data["clientID"],
            client_secret=data["clientSecret"],
        )


@dataclass(frozen=True)
class AuthData:
    email: str
    name: str
    roll_no: str
    access_code: str
    client_id: str
    client_secret: str

    @classmethod
    def from_registration(cls, registration: RegistrationResponse) -> "AuthData":
        """Build credentials from a successful registration."""
        return cls(
            email=registration.email,
            name=registration.name,
            roll_no=registration.roll_no,
            access_code=registration.access_code,
            client_id=registration.client_id,
            client_secret=registration.client_secret,
        )

    def to_payload(self) -> dict:
        return {
            "email": self.email,
            "name": self.name,
            "rollNo": self.roll_no,
            "accessCode": self.access_code,
            "clientID": self.client_id,
            "clientSecret": self.client_secret,
        }


@dataclass(frozen=True)
class AuthResponse:
    token_type: str
    access_token: str
    expires_in: int

    @classmethod
    def from_dict(cls, data: dict) -> "AuthResponse":
        return cls(
            token_type=data["token_type"],
            access_token=data["access_token"],
            expires_in=int(data["expires_in"]),
        )


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class EvaluationApiClient:
    """Thin REST wrapper over the evaluation service.

    Like the log transport, every call returns a value instead of raising:
    HTTP errors, network errors and malformed response bodies all come back
    as ``ApiResponse(success=False, error=...)``. There is no retry.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def register(self, registration: RegistrationData) -> ApiResponse[RegistrationResponse]:
        """Register a user and receive client credentials."""
        return self._post(
            "/register",
            registration.to_payload(),
            RegistrationResponse.from_dict,
            action="Registration",
        )

    def authenticate(self, credentials: AuthData) -> ApiResponse[AuthResponse]:
        """Exchange client credentials for an access token."""
        return self._post(
            "/auth",
            credentials.to_payload(),
            AuthResponse.from_dict,
            action="Authentication",
        )

    def test_connection(self) -> bool:
        """Return True when GET /health answers with a 2xx status."""
        try:
            response = self._client.get(f"{self._base_url}/health")
        except httpx.HTTPError as exc:
            logger.info("Health check against %s failed: %s", self._base_url, exc)
            return False
        return response.is_success

    def _post(
        self,
        path: str,
        payload: dict,
        parse: Callable[[dict], T],
        action: str,
    ) -> ApiResponse[T]:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.post(
                url,
                content=json.dumps(payload).encode("ascii"),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            error = str(exc) or f"{action} failed"
            logger.warning("%s request to %s failed: %s", action, url, error)
            return ApiResponse(success=False, error=error)

        if not response.is_success:
            error = f"{action} failed: {response.status_code} - {response.text}"
            logger.warning("%s", error)
            return ApiResponse(success=False, error=error)

        try:
            data = parse(response.json())
        except (ValueError, KeyError, TypeError) as exc:
            error = f"{action} failed: invalid response body ({exc!r})"
            logger.warning("%s", error)
            return ApiResponse(success=False, error=error)

        return ApiResponse(success=True, data=data)

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
