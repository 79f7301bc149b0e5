"""
Exception classes for formtree structural errors.

This module defines the exception types raised when a form tree is misused:
missing children, broken ownership, operations attempted in the wrong
lifecycle state, unknown field types and similar programmer errors. Validation
failures are never raised; they are collected as `FormError` instances.
"""

from typing import Any


class FormTreeError(Exception):
    """Base exception for all formtree errors."""

    pass


class FormStructureError(FormTreeError):
    """Raised when the form tree is used in a structurally invalid way."""

    def __init__(self, form_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            form_name: Name of the node where the misuse happened
            reason: What was attempted and why it is invalid
        """
        self.form_name = form_name
        self.reason = reason
        super().__init__(f"Form '{form_name}': {reason}")


class ChildNotFoundError(FormStructureError, KeyError):
    """Raised when a child is requested that does not exist in a node."""

    def __init__(self, child_name: str, form_name: str):
        """
        Initialize the exception.

        Params:
            child_name: The missing child name
            form_name: Name of the node that was searched
        """
        self.child_name = child_name
        super().__init__(form_name, f"child '{child_name}' does not exist")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class NodeOwnershipError(FormStructureError):
    """Raised when attaching a node would break exclusive parent ownership."""

    def __init__(self, child_name: str, form_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            child_name: Name of the node being attached
            form_name: Name of the node it was attached to
            reason: Why the attachment is refused
        """
        self.child_name = child_name
        super().__init__(form_name, f"cannot attach '{child_name}': {reason}")


class FormStateError(FormTreeError):
    """Raised when an operation is not allowed in the node's current state."""

    def __init__(self, form_name: str, state: Any, operation: str):
        """
        Initialize the exception.

        Params:
            form_name: Name of the node
            state: Current FormState of the node
            operation: The operation that was attempted
        """
        self.form_name = form_name
        self.state = state
        self.operation = operation
        state_label = getattr(state, "value", state)
        super().__init__(
            f"Cannot {operation} form '{form_name}' while it is in state '{state_label}'"
        )


class UnknownFormTypeError(FormTreeError):
    """Raised when a field type name is not registered in the build context."""

    def __init__(self, type_name: str, known_types: list[str]):
        """
        Initialize the exception.

        Params:
            type_name: The unknown type name
            known_types: Type names registered in the context
        """
        self.type_name = type_name
        self.known_types = known_types
        super().__init__(
            f"Unknown form type '{type_name}'. Registered types: {', '.join(known_types)}"
        )


class ValidatorRequiredError(FormTreeError):
    """Raised when a node carries validation rules but no validator can run them."""

    def __init__(self, form_name: str):
        self.form_name = form_name
        super().__init__(
            f"Form '{form_name}' declares validation rules but has no validator"
        )


class SubscriberError(FormTreeError):
    """Raised when an event subscriber maps an event to an unusable method."""

    def __init__(self, subscriber: Any, method_name: Any, event_name: str):
        """
        Initialize the exception.

        Params:
            subscriber: The subscriber object
            method_name: Method name declared for the event
            event_name: Event the method was declared for
        """
        self.subscriber = subscriber
        self.method_name = method_name
        self.event_name = event_name
        super().__init__(
            f"Subscriber {type(subscriber).__name__} maps '{event_name}' to "
            f"'{method_name}', which is not a callable method"
        )
