"""
FormTree - Stateful form trees with events, validation and conditional fields

FormTree binds data to a tree of form nodes, handles submission and recursive
validation, aggregates structured errors and derives field visibility from
sibling values.
"""

from importlib.metadata import version

from formtree.core import FormConfig, FormContext, FormSettings, FormState
from formtree.errors import ErrorBubblingStrategy, ErrorLevel, FormError
from formtree.events import FieldEvents, FormEvents
from formtree.form import FormCollection, FormNode, FormView
from formtree.validation import CallbackValidator, ValidationResult

__version__ = version("formtree")

__all__ = [
    "__version__",
    "FormNode",
    "FormCollection",
    "FormView",
    "FormConfig",
    "FormContext",
    "FormSettings",
    "FormState",
    "FormEvents",
    "FieldEvents",
    "FormError",
    "ErrorLevel",
    "ErrorBubblingStrategy",
    "ValidationResult",
    "CallbackValidator",
]
