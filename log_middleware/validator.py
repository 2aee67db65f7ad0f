"""Log record validator: checks the closed vocabulary before anything is sent."""

from enum import Enum

import jsonschema

from log_middleware.models import (
    FIELD_NAMES,
    Level,
    LogRecord,
    Package,
    Stack,
    SubmissionResult,
)

LOG_RECORD_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "stack": {"enum": [member.value for member in Stack]},
        "level": {"enum": [member.value for member in Level]},
        "package": {"enum": [member.value for member in Package]},
        # At least one non-whitespace character
        "message": {"type": "string", "pattern": r"\S"},
    },
    "required": list(FIELD_NAMES),
    "additionalProperties": False,
}


def _plain(value):
    return value.value if isinstance(value, Enum) else value


class LogValidator:
    """Validates (stack, level, package, message) tuples against LOG_RECORD_SCHEMA.

    Matching is case-sensitive: only the lowercase canonical values (or the
    enum members themselves) are accepted.
    """

    def __init__(self):
        self._validator = jsonschema.Draft202012Validator(LOG_RECORD_SCHEMA)

    def validate(self, stack, level, package, message):
        """Validate one candidate record.

        Returns:
            tuple: (record: LogRecord | None, failure: SubmissionResult | None).
            Exactly one of the two is set. When several fields are invalid the
            first one in stack, level, package, message order is reported.
        """
        candidate = {
            "stack": _plain(stack),
            "level": _plain(level),
            "package": _plain(package),
            "message": message,
        }

        invalid_fields = {
            error.path[0] for error in self._validator.iter_errors(candidate) if error.path
        }
        for field in FIELD_NAMES:
            if field in invalid_fields:
                return None, SubmissionResult.failure(
                    f"{field} invalid: {candidate[field]}"
                )

        record = LogRecord(
            stack=candidate["stack"],
            level=candidate["level"],
            package=candidate["package"],
            message=message,
        )
        return record, None
