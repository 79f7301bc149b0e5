"""
Immutable view projection of form trees.

`ViewProjector` turns a node and its subtree into `FormView` objects: plain,
read-only variables for renderers. Views are snapshots; changing the tree
afterwards does not change an existing view.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import inflection
from attrs import field, frozen

from formtree.events import FieldEvent, FieldEvents

if TYPE_CHECKING:
    from formtree.form.node import FormNode

logger = logging.getLogger(__name__)


def _frozen_mapping(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


def _plain(value: Any) -> Any:
    if isinstance(value, FormView):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    return value


@frozen
class FormView:
    """
    Read-only view of one node.

    Params:
        vars: View variables (name, value, label, errors, ...)
        children: Child views keyed by child name, in tree order
    """

    vars: Mapping[str, Any] = field(converter=_frozen_mapping)
    children: Mapping[str, "FormView"] = field(factory=dict, converter=_frozen_mapping)

    @property
    def name(self) -> str:
        return self.vars.get("name", "")

    def get_var(self, key: str, default: Any = None) -> Any:
        return self.vars.get(key, default)

    def has_var(self, key: str) -> bool:
        return key in self.vars

    def get_child(self, name: str) -> "FormView | None":
        return self.children.get(name)

    def has_child(self, name: str) -> bool:
        return name in self.children

    def to_dict(self) -> dict[str, Any]:
        """Convert the view and its children to plain nested dicts."""
        return {
            "vars": _plain(self.vars),
            "children": {name: child.to_dict() for name, child in self.children.items()},
        }

    def __getitem__(self, name: str) -> "FormView":
        return self.children[name]

    def __contains__(self, name: object) -> bool:
        return name in self.children

    def __iter__(self) -> Iterator["FormView"]:
        return iter(self.children.values())

    def __len__(self) -> int:
        return len(self.children)


@runtime_checkable
class Renderer(Protocol):
    """Turns a view into output, e.g. HTML."""

    def render(self, view: FormView, theme: str | None = None) -> str: ...


def default_label(name: str) -> str:
    """Humanize a field name: "first_name" -> "First name"."""
    return inflection.humanize(inflection.underscore(name))


class ViewProjector:
    """Project form nodes to immutable views."""

    def project(self, node: "FormNode") -> FormView:
        """
        Build the view of a node and its subtree, and mark the tree as rendered.

        Params:
            node: Node to project

        Returns:
            The node's view
        """
        view = self.build_view(node)
        node.context.mark_rendered(node)
        logger.debug("Projected view of %s", node.property_path or node.name)
        return view

    def build_view(self, node: "FormNode") -> FormView:
        """Build a view without marking the tree as rendered."""
        root = node.root
        dispatcher = node.event_dispatcher
        if node.has_dependencies():
            node.context.evaluator.evaluate(node)

        dispatcher.dispatch(FieldEvents.PRE_RENDER, FieldEvent(node, root))
        variables = self.build_vars(node)
        children = {name: self.build_view(child) for name, child in node.all().items()}

        # Listeners may replace the "vars" entry
        event = dispatcher.dispatch(FieldEvents.POST_RENDER, FieldEvent(node, root, {"vars": variables}))
        return FormView(event.get("vars", variables), children)

    def build_vars(self, node: "FormNode") -> dict[str, Any]:
        config = node.config
        options = config.options
        path = node.property_path
        value = None if options.get("always_empty") else node.value

        variables = {
            "id": "_".join([node.root.name, *path.split(".")]) if path else node.name,
            "name": node.name,
            "full_name": node.full_name,
            "type": config.type,
            "value": value,
            "data": node.get_data(),
            "label": options.get("label") or default_label(node.name),
            "help": options.get("help"),
            "required": bool(options.get("required", False)),
            "disabled": node.disabled,
            "attr": {**config.attributes, **(options.get("attr") or {})},
            "errors": node.get_error_list().messages(),
            "valid": node.is_valid(),
            "submitted": node.is_submitted(),
            "compound": node.is_compound(),
            "visible": node.visible,
            "method": config.method,
            "action": config.action,
        }
        if "choices" in options or node.event_dispatcher.has_listeners(FieldEvents.OPTIONS_LOAD):
            variables["choices"] = node.get_choices()

        variables.update(node.view_vars(self))
        return variables
