"""
Validator collaborator contract.

The form tree never interprets validation rules itself. It hands the node's
value, the node's configured rules and a context mapping to a `Validator`
and records whatever the returned `ValidationResult` reports.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from formtree.validation.result import ValidationResult


@runtime_checkable
class Validator(Protocol):
    """Anything able to validate a value against a set of rules."""

    def validate(self, value: Any, rules: Any, context: Mapping[str, Any]) -> ValidationResult: ...


class CallbackValidator:
    """Adapt a plain callable to the `Validator` protocol.

    The callable receives `(value, rules, context)` and may return:
      - a `ValidationResult`, used as is;
      - a mapping of rule name or path to message, empty meaning success;
      - `True`/`None` for success, `False` for a failure reported under `rule_name`.
    """

    def __init__(
        self,
        callback: Callable[[Any, Any, Mapping[str, Any]], Any],
        message: str = "This value is not valid.",
        rule_name: str = "callback",
    ):
        self.callback = callback
        self.message = message
        self.rule_name = rule_name

    def validate(self, value: Any, rules: Any, context: Mapping[str, Any]) -> ValidationResult:
        outcome = self.callback(value, rules, context)
        if isinstance(outcome, ValidationResult):
            return outcome
        if isinstance(outcome, Mapping):
            return ValidationResult.failure(outcome) if outcome else ValidationResult.success()
        if outcome is False:
            return ValidationResult.failure({self.rule_name: self.message})
        return ValidationResult.success()
