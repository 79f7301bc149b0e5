"""
Form tree nodes and their collaborators.

This package provides the form node, dynamic collections, dependency driven
visibility and the immutable view projection handed to renderers.
"""

from formtree.form.collection import COLLECTION_ERROR_KEY, FormCollection
from formtree.form.dependency import Dependency, DependencyEvaluator
from formtree.form.node import FormNode
from formtree.form.view import FormView, Renderer, ViewProjector, default_label

__all__ = [
    "FormNode",
    "FormCollection",
    "COLLECTION_ERROR_KEY",
    "Dependency",
    "DependencyEvaluator",
    "FormView",
    "Renderer",
    "ViewProjector",
    "default_label",
]
