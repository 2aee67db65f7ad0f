"""Log record model: closed vocabularies, the record itself, and the submission result."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Wire field names, in the order they are validated.
FIELD_NAMES = ("stack", "level", "package", "message")


class Stack(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"


class Level(str, Enum):
    """Log severity, declared from least to most severe."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    # str ordering is alphabetical; compare by severity instead
    def __lt__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other):
        if not isinstance(other, Level):
            return NotImplemented
        return self.severity >= other.severity


_SEVERITY = {member: rank for rank, member in enumerate(Level)}


class Package(str, Enum):
    API = "api"
    CACHE = "cache"
    CONTROLLER = "controller"
    CRON_JOB = "cron_job"
    DB = "db"
    DOMAIN = "domain"
    HANDLER = "handler"
    REPOSITORY = "repository"
    ROUTE = "route"
    SERVICE = "service"


@dataclass(frozen=True)
class LogRecord:
    """A single event bound for the remote log sink.

    Plain strings are coerced to their enum members; anything outside the
    closed sets, or a blank message, raises ValueError at construction.
    """

    stack: Stack
    level: Level
    package: Package
    message: str

    def __post_init__(self):
        object.__setattr__(self, "stack", Stack(self.stack))
        object.__setattr__(self, "level", Level(self.level))
        object.__setattr__(self, "package", Package(self.package))
        if not isinstance(self.message, str) or not self.message.strip():
            raise ValueError(f"message invalid: {self.message!r}")


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "SubmissionResult":
        return cls(success=True)

    @classmethod
    def failure(cls, message: str) -> "SubmissionResult":
        return cls(success=False, message=message)


def record_to_dict(record: LogRecord) -> dict:
    """Convert a LogRecord to the JSON body expected by the log service."""
    return {
        "stack": record.stack.value,
        "level": record.level.value,
        "package": record.package.value,
        "message": record.message,
    }
