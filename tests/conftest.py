"""
Shared test fixtures and utilities for the formtree test suite.
"""

import pytest

from formtree.core import FormContext
from formtree.form import FormNode
from formtree.validation import CallbackValidator


class EventRecorder:
    """Listener factory recording the names of the events it receives, in order."""

    def __init__(self):
        self.calls: list[tuple[str, object]] = []

    def listener(self, label: str):
        def record(event):
            self.calls.append((label, event))

        return record

    def watch(self, node: FormNode, *event_names: str) -> "EventRecorder":
        for event_name in event_names:
            node.add_event_listener(event_name, self.listener(event_name))
        return self

    @property
    def names(self) -> list[str]:
        return [label for label, _ in self.calls]


def _required_rule(value, rules, context):
    """Fail empty values when the rules mention "required"."""
    if rules and "required" in str(rules) and value in (None, "", [], {}):
        return {"required": "This value should not be blank."}
    return None


@pytest.fixture
def context():
    return FormContext()


@pytest.fixture
def required_validator():
    return CallbackValidator(_required_rule)


@pytest.fixture
def validating_context(required_validator):
    """Context whose default validator understands the "required" rule."""
    return FormContext(validator=required_validator)


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def user_form(validating_context):
    """User form with two leaves and a nested address form.

    Usage:
        user_form.submit({"name": "Ada", "email": "ada@example.com", "address": {...}})
    """

    def build(form):
        form.add("name", "text", rules="required")
        form.add("email", "email")
        form.add("address", "form")
        address = form.get("address")
        address.add("street", "text", rules="required")
        address.add("city", "text")

    return FormNode("user", context=validating_context, build=build)
