"""
Outcome of a validator call.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from attrs import field, frozen


def _frozen_messages(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


@frozen
class ValidationResult:
    """
    Result returned by a `Validator`.

    Params:
        valid: Whether the value passed every rule
        errors: Rule name or relative path -> message (or list of messages)
        warnings: Same shape as errors; never makes the result invalid
    """

    valid: bool
    errors: Mapping[str, Any] = field(factory=dict, converter=_frozen_messages)
    warnings: Mapping[str, Any] = field(factory=dict, converter=_frozen_messages)

    @classmethod
    def success(cls, warnings: Mapping[str, Any] | None = None) -> "ValidationResult":
        return cls(True, {}, warnings)

    @classmethod
    def failure(
        cls, errors: Mapping[str, Any], warnings: Mapping[str, Any] | None = None
    ) -> "ValidationResult":
        return cls(False, errors, warnings)

    def is_valid(self) -> bool:
        return self.valid

    def is_failed(self) -> bool:
        return not self.valid

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def first_error(self) -> str | None:
        for message in self.errors.values():
            if isinstance(message, (list, tuple)):
                return message[0] if message else None
            return message
        return None
