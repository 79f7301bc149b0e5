"""
Ordered collection of form errors with filtering and projections.

`ErrorList` is the single structured store of errors on a node. The flat
(`{"a.b": "message"}`) and nested (`{"a": {"b": ["message"]}}`) shapes are
pure projections computed on demand.
"""

from collections.abc import Iterable, Iterator
from typing import Any

from formtree.errors.models import ErrorLevel, FormError

FORM_ERROR_KEY = "_form"


class ErrorList:
    """Append-only (until cleared) list of `FormError` instances."""

    def __init__(self, errors: Iterable[FormError] = ()):
        self._errors: list[FormError] = []
        self.add_all(errors)

    def add(self, error: FormError) -> "ErrorList":
        """Append an error. Duplicates are kept."""
        self._errors.append(error)
        return self

    def add_all(self, errors: Iterable[FormError]) -> "ErrorList":
        for error in errors:
            self.add(error)
        return self

    def all(self) -> list[FormError]:
        return list(self._errors)

    def by_level(self, level: ErrorLevel) -> "ErrorList":
        return ErrorList(error for error in self._errors if error.level is level)

    def by_path(self, path: str, deep: bool = False) -> "ErrorList":
        """
        Filter errors by path.

        Params:
            path: Dot path such as "email" or "address.zipcode"
            deep: Also match errors below the path ("address" matches "address.street")

        Returns:
            New ErrorList with the matching errors
        """

        def matches(error: FormError) -> bool:
            if error.path is None:
                return False
            if error.path == path:
                return True
            return deep and error.path.startswith(path + ".")

        return ErrorList(error for error in self._errors if matches(error))

    def blocking(self) -> "ErrorList":
        return self.by_level(ErrorLevel.ERROR)

    def has_blocking(self) -> bool:
        return any(error.is_blocking() for error in self._errors)

    def first(self, path: str | None = None) -> FormError | None:
        """Return the first error, or the first error at `path` when given."""
        for error in self._errors:
            if path is None or error.path == path:
                return error
        return None

    def merge(self, other: "ErrorList") -> "ErrorList":
        """Return a new list holding this list's errors followed by `other`'s."""
        return ErrorList([*self._errors, *other])

    def prefixed(self, prefix: str) -> "ErrorList":
        """Return a new list with every path re-rooted under `prefix`."""
        return ErrorList(
            error.with_path(f"{prefix}.{error.path}" if error.path else prefix)
            for error in self._errors
        )

    def messages(self) -> list[str]:
        return [error.get_message() for error in self._errors]

    def to_flat(self) -> dict[str, str]:
        """
        Project to a flat dot-path map keeping the first message per path.

        Returns:
            {"email": "Email is required", "address.street": "Street is required"}
            Path-less errors are keyed "_form".
        """
        result: dict[str, str] = {}
        for error in self._errors:
            result.setdefault(error.path or FORM_ERROR_KEY, error.get_message())
        return result

    def to_array(self) -> dict[str, Any]:
        """
        Project to a nested map mirroring the tree shape.

        Returns:
            {"email": ["Email is required"], "address": {"street": ["Street is required"]}}
            Path-less errors are listed under "_form". A path holding both its
            own messages and nested paths keeps its own messages under "_form".
        """
        result: dict[str, Any] = {}
        for error in self._errors:
            if error.path is None:
                result.setdefault(FORM_ERROR_KEY, []).append(error.get_message())
                continue

            *parents, leaf = error.path.split(".")
            current = result
            for key in parents:
                slot = current.get(key)
                if isinstance(slot, list):
                    slot = {FORM_ERROR_KEY: slot}
                    current[key] = slot
                elif slot is None:
                    slot = {}
                    current[key] = slot
                current = slot

            slot = current.get(leaf)
            if isinstance(slot, dict):
                slot.setdefault(FORM_ERROR_KEY, []).append(error.get_message())
            else:
                current.setdefault(leaf, []).append(error.get_message())
        return result

    def discard(self, errors: Iterable[FormError]) -> "ErrorList":
        """Remove the given error instances in place. Equal but distinct errors are kept."""
        discarded = {id(error) for error in errors}
        self._errors = [error for error in self._errors if id(error) not in discarded]
        return self

    def clear(self) -> "ErrorList":
        self._errors.clear()
        return self

    def is_empty(self) -> bool:
        return not self._errors

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[FormError]:
        return iter(list(self._errors))

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"ErrorList({self._errors!r})"

    def __str__(self) -> str:
        return "\n".join(str(error) for error in self._errors)
