"""
formtree exception classes.

This package provides the exception types raised for structural misuse of a
form tree. Validation failures are collected, never raised.
"""

from formtree.exceptions.core import (
    ChildNotFoundError,
    FormStateError,
    FormStructureError,
    FormTreeError,
    NodeOwnershipError,
    SubscriberError,
    UnknownFormTypeError,
    ValidatorRequiredError,
)

__all__ = [
    "FormTreeError",
    "FormStructureError",
    "ChildNotFoundError",
    "NodeOwnershipError",
    "FormStateError",
    "UnknownFormTypeError",
    "ValidatorRequiredError",
    "SubscriberError",
]
