"""
Structured error model for form trees.

This package provides the error value type, the error collection with its
flat and nested projections, and the bubbling policy used for deep reads.
"""

from formtree.errors.bubbling import ErrorBubblingStrategy
from formtree.errors.error_list import FORM_ERROR_KEY, ErrorList
from formtree.errors.models import ErrorLevel, FormError

__all__ = [
    "ErrorLevel",
    "FormError",
    "ErrorList",
    "ErrorBubblingStrategy",
    "FORM_ERROR_KEY",
]
