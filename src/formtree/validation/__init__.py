"""
Validation contract consumed by form nodes.

This package provides the `Validator` protocol, the `ValidationResult` value
and a callable adapter. Rule languages live outside formtree.
"""

from formtree.validation.result import ValidationResult
from formtree.validation.validators import CallbackValidator, Validator

__all__ = [
    "Validator",
    "ValidationResult",
    "CallbackValidator",
]
