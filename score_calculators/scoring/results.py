"""Tagged validation results and the engine's error taxonomy."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ConfigurationError(ValueError):
    """A scoring table or exam definition is malformed.

    Never raised for user input; it signals a bug in the configured data.
    """


class ErrorKind(str, Enum):
    """Why a user-entered field was rejected."""

    INVALID_FORMAT = "invalid_format"
    INVALID_CATEGORY = "invalid_category"
    OUT_OF_DOMAIN = "out_of_domain"


@dataclass(frozen=True)
class Valid:
    value: Any


@dataclass(frozen=True)
class Incomplete:
    """Field left empty: excluded from the computation, not an error."""


@dataclass(frozen=True)
class Invalid:
    kind: ErrorKind
    message: str


FieldResult = Union[Valid, Incomplete, Invalid]


@dataclass(frozen=True)
class InvalidAggregate:
    """
    Aggregation blocked by one or more rejected rows.

    errors maps row index -> field name -> Invalid, so the presentation
    layer can flag exactly which field of which row is at fault.
    """

    errors: dict[int, dict[str, Invalid]] = field(default_factory=dict)

    def messages(self) -> list[str]:
        """Flatten errors into human-readable lines, ordered by row."""
        lines = []
        for index in sorted(self.errors):
            for field_name, invalid in self.errors[index].items():
                lines.append(f"Row {index + 1} {field_name}: {invalid.message}")
        return lines
