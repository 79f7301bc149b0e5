"""
Event objects passed to listeners.

Events are mutable carriers: listeners may replace `FormEvent.data` or update
a `FieldEvent` context, and the dispatcher hands the same object back to the
caller once every listener has run.
"""

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from formtree.form.node import FormNode


@dataclass
class Event:
    """Base event with propagation control."""

    propagation_stopped: bool = dataclasses.field(default=False, init=False)

    def stop_propagation(self) -> None:
        """Prevent the remaining listeners of the current dispatch from running."""
        self.propagation_stopped = True

    def is_propagation_stopped(self) -> bool:
        return self.propagation_stopped


@dataclass
class FormEvent(Event):
    """
    Event dispatched for form lifecycle transitions.

    Params:
        form: Node the event was dispatched on
        data: Data being bound or submitted; listeners may replace it
        context: Free-form extra values
    """

    form: "FormNode | None" = None
    data: Any = None
    context: dict[str, Any] = dataclasses.field(default_factory=dict)

    def get_context(self, key: str | None = None, default: Any = None) -> Any:
        if key is None:
            return self.context
        return self.context.get(key, default)

    def set_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def has_context(self, key: str) -> bool:
        return key in self.context


@dataclass
class FieldEvent(Event):
    """
    Event dispatched for field level changes.

    Params:
        field: Node the event concerns
        form: Root of the tree owning the field
        context: Event values such as "visible", "trigger_field", "old_value"
    """

    field: "FormNode | None" = None
    form: "FormNode | None" = None
    context: dict[str, Any] = dataclasses.field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.context.get(key, default)

    def set(self, key: str, value: Any) -> "FieldEvent":
        self.context[key] = value
        return self

    def has(self, key: str) -> bool:
        return key in self.context

    @property
    def visible(self) -> bool:
        return bool(self.context.get("visible", True))

    @visible.setter
    def visible(self, value: bool) -> None:
        self.context["visible"] = bool(value)

    def set_visible(self, visible: bool) -> "FieldEvent":
        self.visible = visible
        return self

    @property
    def trigger_field(self) -> str | None:
        return self.context.get("trigger_field")

    @property
    def trigger_value(self) -> Any:
        return self.context.get("trigger_value")

    def is_dependency_triggered(self) -> bool:
        return "trigger_field" in self.context

    @property
    def field_name(self) -> str | None:
        return self.field.name if self.field is not None else None

    @property
    def value(self) -> Any:
        return self.field.value if self.field is not None else None

    @property
    def form_data(self) -> Any:
        return self.form.get_data() if self.form is not None else {}

    def get_field_value(self, path: str) -> Any:
        """
        Read another field's current value from the owning tree.

        Params:
            path: Child name or dot path from the root

        Returns:
            Leaf value, compound data, or None when the path does not exist
        """
        if self.form is None:
            return None
        node = self.form.find(path)
        if node is None:
            return None
        return node.value if not node.is_compound() else node.get_data()
