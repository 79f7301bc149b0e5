"""
Core formtree components.

This package provides the lifecycle states, immutable configuration models and
the explicit build context shared by the nodes of one form tree.
"""

from formtree.core.config import FormConfig, FormSettings
from formtree.core.context import FormContext, FormType, TypeRegistry
from formtree.core.state import FormState
from formtree.core.types import FormData, FormValue, LegacyErrors, OptionsMap

__all__ = [
    "FormState",
    "FormConfig",
    "FormSettings",
    "FormContext",
    "FormType",
    "TypeRegistry",
    "FormData",
    "FormValue",
    "LegacyErrors",
    "OptionsMap",
]
