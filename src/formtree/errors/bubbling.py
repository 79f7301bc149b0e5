"""
Error bubbling policy for nested form trees.

Bubbling decides whether a parent's deep error read walks into its children.
It is a read-time aggregation only: bubbled errors are computed on each call
and never stored on the parent or the child.
"""

from typing import TYPE_CHECKING

from attrs import frozen

from formtree.errors.error_list import ErrorList
from formtree.errors.models import FormError

if TYPE_CHECKING:
    from formtree.form.node import FormNode


@frozen
class ErrorBubblingStrategy:
    """
    Policy controlling how child errors reach a parent's aggregate view.

    Params:
        active: Whether child errors bubble at all
        stop_on_blocking: Stop collecting a child's errors after its first blocking error
        max_depth: Deepest relative path level that may bubble (0 = unlimited)
    """

    active: bool = True
    stop_on_blocking: bool = False
    max_depth: int = 0

    @classmethod
    def enabled(cls) -> "ErrorBubblingStrategy":
        return cls(active=True)

    @classmethod
    def disabled(cls) -> "ErrorBubblingStrategy":
        return cls(active=False)

    @classmethod
    def stopping_on_blocking(cls) -> "ErrorBubblingStrategy":
        return cls(active=True, stop_on_blocking=True)

    @classmethod
    def with_depth_limit(cls, max_depth: int) -> "ErrorBubblingStrategy":
        return cls(active=True, max_depth=max_depth)

    def is_enabled(self) -> bool:
        return self.active

    def should_bubble(self, error: FormError, current_depth: int = 0) -> bool:
        """
        Check whether an error may bubble at the given depth.

        Params:
            error: Candidate error
            current_depth: Levels below the direct child the error sits at

        Returns:
            False when bubbling is disabled or the depth limit is reached
        """
        if not self.active:
            return False
        if self.max_depth > 0 and current_depth >= self.max_depth:
            return False
        return True

    def collect_errors(self, parent: "FormNode", child: "FormNode") -> ErrorList:
        """
        Collect the errors a child contributes to its parent's deep read.

        The child's own deep error view is re-rooted under the child's name.
        Each error keeps its original origin, or gets the child's id when it has none.

        Params:
            parent: The node performing the deep read
            child: One of its children

        Returns:
            New ErrorList of bubbled errors (empty when disabled)
        """
        bubbled = ErrorList()
        if not self.active:
            return bubbled

        for error in child.get_error_list(deep=True):
            depth = len(error.path.split(".")) if error.path else 0
            if not self.should_bubble(error, depth):
                continue

            path = f"{child.name}.{error.path}" if error.path else child.name
            bubbled.add(
                FormError(
                    message=error.message,
                    level=error.level,
                    path=path,
                    parameters=error.parameters,
                    cause=error.cause,
                    origin=error.origin or child.id,
                )
            )
            if self.stop_on_blocking and error.is_blocking():
                break
        return bubbled

    def bubble_up(self, node: "FormNode") -> ErrorList:
        """
        Gather the own errors of a node and its ancestors, nearest first.

        Params:
            node: Starting node

        Returns:
            New ErrorList, bounded by `max_depth` ancestors when set
        """
        collected = ErrorList()
        current: "FormNode | None" = node
        depth = 0
        while current is not None:
            collected = collected.merge(current.get_error_list(deep=False))
            if self.max_depth > 0 and depth >= self.max_depth:
                break
            current = current.parent
            depth += 1
        return collected
