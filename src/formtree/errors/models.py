"""
Structured validation error values.

A `FormError` is an immutable record of one violation: its message, severity,
path relative to the node that holds it, interpolation parameters, an
optional cause and the id of the node that produced it.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Any

from attrs import evolve, field, frozen

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class ErrorLevel(Enum):
    """Severity of a form error."""

    ERROR = "error"  # Blocks a valid submission
    WARNING = "warning"  # Submission stays valid, user should be told
    INFO = "info"  # Informational only

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def is_blocking(self) -> bool:
        """Check whether errors of this level make a submission invalid."""
        return self is ErrorLevel.ERROR


def _frozen_parameters(value: Any) -> Any:
    return MappingProxyType(dict(value or {}))


@frozen
class FormError:
    """
    A single structured violation.

    Params:
        message: Message text, may contain `{{ name }}` placeholders
        level: Severity level
        path: Dot path relative to the node holding the error, None for node-level errors
        parameters: Values interpolated into the message placeholders
        cause: Original cause (exception, validator result, ...)
        origin: Id of the node that produced the error
    """

    message: str
    level: ErrorLevel = ErrorLevel.ERROR
    path: str | None = None
    parameters: Any = field(factory=dict, converter=_frozen_parameters)
    cause: Any = field(default=None, eq=False)
    origin: str | None = None

    @property
    def raw_message(self) -> str:
        return self.message

    def get_message(self) -> str:
        """
        Return the message with `{{ name }}` placeholders interpolated.

        Placeholders without a matching parameter are left untouched.

        Examples:
            "Must be at least {{ min }} characters" with {"min": 8}
            -> "Must be at least 8 characters"
        """
        if not self.parameters:
            return self.message

        def replace(match: re.Match) -> str:
            key = match.group(1)
            if key in self.parameters:
                return str(self.parameters[key])
            return match.group(0)

        return _PLACEHOLDER.sub(replace, self.message)

    def is_blocking(self) -> bool:
        return self.level.is_blocking()

    def with_path(self, path: str | None) -> "FormError":
        """Return a copy of this error re-rooted at `path`."""
        return evolve(self, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.get_message(),
            "level": self.level.value,
            "path": self.path,
            "parameters": dict(self.parameters),
        }

    def __str__(self) -> str:
        prefix = f"{self.path}: " if self.path else ""
        return prefix + self.get_message()
