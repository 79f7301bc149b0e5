"""
Build context for form trees.

A `FormContext` is created by the caller for one form build (typically one
request) and passed to the nodes it builds. It owns the field type registry,
the default validator, the dependency evaluator and the view projector, and
tracks which roots have been projected. Nothing here is process-global.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from attrs import field, frozen

from formtree.core.config import FormSettings
from formtree.exceptions import UnknownFormTypeError

if TYPE_CHECKING:
    from formtree.form.dependency import DependencyEvaluator
    from formtree.form.node import FormNode
    from formtree.form.view import ViewProjector
    from formtree.validation.validators import Validator


def _frozen_mapping(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


@frozen
class FormType:
    """A registered field type.

    Params:
        name: Type name used with `FormNode.add`
        compound: Whether nodes of this type hold children
        default_options: Options applied before the caller's options
        parent: Name of a type whose default options are inherited
    """

    name: str
    compound: bool = False
    default_options: Mapping[str, Any] = field(factory=dict, converter=_frozen_mapping)
    parent: str | None = None


BUILTIN_TYPES = (
    FormType("form", compound=True),
    FormType("collection", compound=True),
    FormType("text"),
    FormType("textarea", parent="text"),
    FormType("email", parent="text"),
    FormType("password", parent="text", default_options={"always_empty": True}),
    FormType("url", parent="text"),
    FormType("tel", parent="text"),
    FormType("search", parent="text"),
    FormType("hidden", default_options={"required": False}),
    FormType("number"),
    FormType("integer", parent="number"),
    FormType("range", parent="number"),
    FormType("date"),
    FormType("datetime"),
    FormType("time"),
    FormType("color"),
    FormType("file"),
    FormType("checkbox", default_options={"value": "1"}),
    FormType("radio"),
    FormType("select", default_options={"choices": {}}),
    FormType("choice", parent="select"),
    FormType("button"),
    FormType("submit", parent="button"),
    FormType("reset", parent="button"),
)


class TypeRegistry:
    """Registry of field types available to one build context."""

    def __init__(self, types: Iterable[FormType] = ()):
        self._types: dict[str, FormType] = {}
        self._aliases: dict[str, str] = {}
        for form_type in types:
            self.register(form_type)

    @classmethod
    def with_builtin_types(cls) -> "TypeRegistry":
        """Create a registry pre-populated with the built-in field types."""
        return cls(BUILTIN_TYPES)

    def register(self, form_type: FormType) -> None:
        """Register a type, replacing any previous type of the same name."""
        self._types[form_type.name] = form_type

    def alias(self, alias: str, type_name: str) -> None:
        """Make `alias` resolve to an already registered type."""
        if type_name not in self._types:
            raise UnknownFormTypeError(type_name, self.names())
        self._aliases[alias] = type_name

    def has(self, name: str) -> bool:
        return self._aliases.get(name, name) in self._types

    def get(self, name: str) -> FormType:
        """
        Resolve a type by name or alias.

        Params:
            name: Registered type name or alias

        Returns:
            The registered FormType

        Raises:
            UnknownFormTypeError: If the name is not registered
        """
        resolved = self._aliases.get(name, name)
        if resolved not in self._types:
            raise UnknownFormTypeError(name, self.names())
        return self._types[resolved]

    def names(self) -> list[str]:
        return list(self._types)

    def resolve_options(self, name: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Merge a type's default options (parents first) with caller options.

        Params:
            name: Registered type name or alias
            options: Caller supplied options, taking precedence over defaults

        Returns:
            New dict of merged options
        """
        chain = []
        seen = set()
        current: str | None = name
        while current is not None and current not in seen:
            seen.add(current)
            form_type = self.get(current)
            chain.append(form_type)
            current = form_type.parent

        merged: dict[str, Any] = {}
        for form_type in reversed(chain):
            merged.update(form_type.default_options)
        merged.update(options or {})
        return merged


class FormContext:
    """Explicit, per-build state shared by the nodes of one form tree.

    Responsibilities:
      - Hold the `FormSettings` applied to new nodes.
      - Resolve field type names through its own `TypeRegistry`.
      - Provide the default validator, dependency evaluator and view projector.
      - Remember which root forms have already been projected to a view.
    """

    def __init__(
        self,
        settings: FormSettings | None = None,
        types: TypeRegistry | None = None,
        validator: "Validator | None" = None,
        evaluator: "DependencyEvaluator | None" = None,
        projector: "ViewProjector | None" = None,
    ):
        self.settings = settings or FormSettings()
        self.types = types or TypeRegistry.with_builtin_types()
        self.validator = validator
        self._evaluator = evaluator
        self._projector = projector
        self._rendered: set[str] = set()

    @property
    def evaluator(self) -> "DependencyEvaluator":
        if self._evaluator is None:
            from formtree.form.dependency import DependencyEvaluator

            self._evaluator = DependencyEvaluator()
        return self._evaluator

    @property
    def projector(self) -> "ViewProjector":
        if self._projector is None:
            from formtree.form.view import ViewProjector

            self._projector = ViewProjector()
        return self._projector

    def resolve_type(self, name: str) -> FormType:
        """
        Resolve a field type for node creation.

        With `strict_types` disabled, unknown names resolve to an ad-hoc leaf type
        instead of raising.
        """
        if self.types.has(name) or self.settings.strict_types:
            return self.types.get(name)
        return FormType(name)

    def resolve_options(self, name: str, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        if self.types.has(name):
            return self.types.resolve_options(name, options)
        return dict(options or {})

    def mark_rendered(self, node: "FormNode") -> None:
        self._rendered.add(node.root.id)

    def is_rendered(self, node: "FormNode") -> bool:
        """Check whether a view was already projected for this node's tree."""
        return node.root.id in self._rendered
