"""
Core type definitions for formtree.

This module contains the type aliases shared across the form tree, its error
model and its view projection.
"""

from collections.abc import Mapping
from typing import Any

FormValue = str | int | float | bool | list | dict | None

FormData = dict[str, Any]

OptionsMap = Mapping[str, Any]

LegacyErrors = dict[str, Any]
