"""
Dependency driven visibility of form fields.

A field may depend on the value of another field (its controller). The
default check shows the field when the controller's value is one of the
expected values. Listeners registered for `FieldEvents.DEPENDENCY_CHECK` on
the dependent field can override the outcome by setting `event.visible`.

Evaluation is pull based: it runs when a view is projected and when the tree
owning the field is submitted. Results are never cached across cycles.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from attrs import field, frozen

from formtree.events import FieldEvent, FieldEvents
from formtree.exceptions import ChildNotFoundError

if TYPE_CHECKING:
    from formtree.form.node import FormNode

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (Sequence, set, frozenset)) and not isinstance(
        value, (str, bytes, bytearray)
    )


def _as_values(value: Any) -> tuple:
    if _is_sequence(value):
        return tuple(value)
    return (value,)


@frozen
class Dependency:
    """
    One visibility condition of a field.

    Params:
        controller: Controlling node, or its name / dot path
        values: Controller values that make the field visible
        group: Optional group label, exposed to listeners
    """

    controller: Any = field(eq=False)
    values: tuple = field(converter=_as_values)
    group: str | None = None

    @property
    def controller_name(self) -> str:
        if isinstance(self.controller, str):
            return self.controller
        return self.controller.property_path or self.controller.name

    def matches(self, value: Any) -> bool:
        """
        Check the default condition against a controller value.

        A sequence value (e.g. a multi-select) matches when any of its items
        is an expected value.
        """
        if _is_sequence(value):
            return any(item in self.values for item in value)
        return value in self.values


class DependencyEvaluator:
    """Compute field visibility from controller values, through the field's events."""

    def resolve_controller(self, node: "FormNode", dependency: Dependency) -> "FormNode":
        """
        Find the node controlling a dependency.

        Names and dot paths are looked up from the dependent node's parent
        first, then from the root.

        Raises:
            ChildNotFoundError: If the controller cannot be found
        """
        if not isinstance(dependency.controller, str):
            return dependency.controller

        path = dependency.controller
        parent = node.parent
        if parent is not None:
            found = parent.find(path)
            if found is not None and found is not node:
                return found

        root = node.root
        found = root.find(path)
        if found is None or found is node:
            raise ChildNotFoundError(path, (parent or root).name)
        return found

    def controller_value(self, controller: "FormNode") -> Any:
        if controller.is_compound():
            return controller.get_data()
        return controller.value

    def evaluate(self, node: "FormNode") -> bool:
        """
        Evaluate a field's visibility and dispatch the matching events.

        Sequence of events on the field's dispatcher:
          1. DEPENDENCY_MET for the first dependency that is met
          2. DEPENDENCY_CHECK, whose listeners may override `visible`
          3. SHOW, or HIDE followed by DEPENDENCY_NOT_MET

        Params:
            node: Field to evaluate

        Returns:
            Final visibility, also stored on `node.visible`
        """
        if not node.has_dependencies():
            node.visible = True
            return True

        root = node.root
        dispatcher = node.event_dispatcher
        visible = False

        for dependency in node.dependencies:
            controller = self.resolve_controller(node, dependency)
            value = self.controller_value(controller)
            if dependency.matches(value):
                visible = True
                dispatcher.dispatch(
                    FieldEvents.DEPENDENCY_MET,
                    FieldEvent(
                        node,
                        root,
                        {
                            "trigger_field": dependency.controller_name,
                            "trigger_value": value,
                            "group": dependency.group,
                            "visible": True,
                        },
                    ),
                )
                break

        check = dispatcher.dispatch(
            FieldEvents.DEPENDENCY_CHECK,
            FieldEvent(node, root, {"visible": visible, "dependencies": node.dependencies}),
        )
        visible = check.visible

        if visible:
            dispatcher.dispatch(FieldEvents.SHOW, FieldEvent(node, root, {"visible": True}))
        else:
            dispatcher.dispatch(FieldEvents.HIDE, FieldEvent(node, root, {"visible": False}))
            dispatcher.dispatch(
                FieldEvents.DEPENDENCY_NOT_MET, FieldEvent(node, root, {"visible": False})
            )

        node.visible = visible
        logger.debug("Field %s is %s", node.property_path or node.name, "visible" if visible else "hidden")
        return visible
