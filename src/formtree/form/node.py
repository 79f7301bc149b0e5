"""
Form tree node.

A `FormNode` is either a leaf field holding one scalar value, or a compound
node whose data is derived from its children. Every node owns its event
dispatcher, its structured error list and its lifecycle state:

    BUILDING -> READY -> SUBMITTED -> VALID | INVALID

Parents own their children exclusively. The back-reference from a child to
its parent is weak, so a detached subtree never keeps its former root alive.
"""

import logging
import weakref
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from formtree.core import FormConfig, FormContext, FormState, LegacyErrors
from formtree.errors import ErrorBubblingStrategy, ErrorLevel, ErrorList, FormError
from formtree.events import (
    EventDispatcher,
    EventSubscriber,
    FieldEvent,
    FieldEvents,
    FormEvent,
    FormEvents,
)
from formtree.exceptions import (
    ChildNotFoundError,
    FormStateError,
    FormStructureError,
    NodeOwnershipError,
    ValidatorRequiredError,
)
from formtree.form.dependency import Dependency
from formtree.validation import ValidationResult, Validator

if TYPE_CHECKING:
    from formtree.form.view import FormView, Renderer, ViewProjector

logger = logging.getLogger(__name__)

VALUE_KEY = "value"
INVALID_MESSAGE = "This value is not valid."


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def as_mapping(value: Any) -> dict[str, Any]:
    """Copy mapping data, re-key sequences by position, and drop anything else."""
    if isinstance(value, Mapping):
        return dict(value)
    if is_sequence(value):
        return {str(index): item for index, item in enumerate(value)}
    return {}


def _messages(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return [str(item) for item in value]
    return [str(value)]


class FormNode:
    """
    One node of a form tree.

    Params:
        name: Node name, also its key in the parent's child map
        config: Node configuration; defaults to a compound "form" node
        context: Build context shared by the tree; a fresh one is created when omitted
        validator: Validator for this node; falls back to the context's validator
        subscribers: Event subscribers registered before the build events fire
        build: Callable receiving the node while it is BUILDING, used to add children
        metadata: Free-form data attached to the node, never read by the tree itself

    Raises:
        FormStructureError: If `config.name` differs from `name`
    """

    def __init__(
        self,
        name: str,
        config: FormConfig | None = None,
        *,
        context: FormContext | None = None,
        validator: Validator | None = None,
        subscribers: Iterable[EventSubscriber] = (),
        build: Callable[["FormNode"], Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ):
        self.context = context or FormContext()
        settings = self.context.settings
        if config is None:
            config = FormConfig(
                name=name,
                type="form",
                compound=True,
                method=settings.default_method,
                error_bubbling=settings.error_bubbling,
            )
        elif config.name != name:
            raise FormStructureError(name, f"config is named '{config.name}'")

        self.id = uuid4().hex
        self._config = config
        self._state = FormState.BUILDING
        self._model_data: dict[str, Any] = {}
        self._submitted_data: dict[str, Any] = {}
        self._children: dict[str, FormNode] = {}
        self._parent_ref: weakref.ref | None = None
        self._error_list = ErrorList()
        self._validation_errors: list[FormError] = []
        self._bubbling = (
            ErrorBubblingStrategy.enabled() if config.error_bubbling else ErrorBubblingStrategy.disabled()
        )
        self._dispatcher = EventDispatcher(log_events=settings.log_events)
        self._validator = validator
        self._dependencies: list[Dependency] = []
        self._disabled = bool(config.get_option("disabled", False))
        self._in_submit = False
        self.visible = True
        self.metadata: dict[str, Any] = dict(metadata or {})

        for subscriber in subscribers:
            self._dispatcher.add_subscriber(subscriber)
        self._build(build)

    def _build(self, build: Callable[["FormNode"], Any] | None) -> None:
        self._dispatcher.dispatch(FormEvents.PRE_BUILD, FormEvent(self))
        if build is not None:
            build(self)
        self._dispatcher.dispatch(FormEvents.POST_BUILD, FormEvent(self))
        self._state = FormState.READY

    # Configuration and state

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def config(self) -> FormConfig:
        return self._config

    @property
    def state(self) -> FormState:
        return self._state

    def is_compound(self) -> bool:
        return self._config.compound

    def is_submitted(self) -> bool:
        return self._state.is_submitted()

    def is_valid(self) -> bool:
        return self._state.is_valid()

    def is_empty(self) -> bool:
        return not self._model_data and not self._submitted_data

    @property
    def validator(self) -> Validator | None:
        return self._validator or self.context.validator

    @validator.setter
    def validator(self, validator: Validator | None) -> None:
        """Replace the node's own validator; None falls back to the context's."""
        self._validator = validator

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def disabled(self) -> bool:
        return self._disabled

    def _ensure_ready(self, operation: str) -> None:
        if self._state is FormState.BUILDING:
            raise FormStateError(self.name, self._state, operation)

    # Tree structure

    @property
    def parent(self) -> "FormNode | None":
        return self._parent_ref() if self._parent_ref is not None else None

    def _set_parent(self, parent: "FormNode | None") -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    @property
    def root(self) -> "FormNode":
        node = self
        while (parent := node.parent) is not None:
            node = parent
        return node

    def is_root(self) -> bool:
        return self.parent is None

    def is_ancestor_of(self, node: "FormNode") -> bool:
        current = node.parent
        while current is not None:
            if current is self:
                return True
            current = current.parent
        return False

    @property
    def property_path(self) -> str:
        """Dot path from the root, e.g. "address.street" (empty for the root)."""
        names = []
        node = self
        while (parent := node.parent) is not None:
            names.append(node.name)
            node = parent
        return ".".join(reversed(names))

    @property
    def full_name(self) -> str:
        """Request style name, e.g. "user[address][street]"."""
        path = self.property_path
        if not path:
            return self.name
        return self.root.name + "".join(f"[{part}]" for part in path.split("."))

    def add(
        self,
        child: "FormNode | str",
        type_name: str = "text",
        options: Mapping[str, Any] | None = None,
        **extra_options: Any,
    ) -> "FormNode":
        """
        Attach a child node, or create one from a name and a field type.

        Params:
            child: Node to attach, or the name of the node to create
            type_name: Registered field type used when creating the node
            options: Options of the created node; "rules" becomes its validation rules
            **extra_options: Merged over `options`

        Returns:
            This node, for chaining

        Raises:
            FormStructureError: If this node is not compound
            NodeOwnershipError: If the child has another parent or is an ancestor
            UnknownFormTypeError: If `type_name` is not registered (strict types)
        """
        if not self.is_compound():
            raise FormStructureError(self.name, "cannot add children to a non-compound field")

        if isinstance(child, FormNode):
            node = child
        else:
            node = self._create_child(child, type_name, {**(options or {}), **extra_options})
        self._attach(node)
        return self

    def _create_child(self, name: str, type_name: str, options: dict[str, Any]) -> "FormNode":
        form_type = self.context.resolve_type(type_name)
        merged = self.context.resolve_options(type_name, options)
        rules = merged.pop("rules", None)
        attributes = merged.pop("attributes", {})

        if form_type.name == "collection":
            from formtree.form.collection import FormCollection

            return FormCollection.from_options(name, merged, context=self.context, rules=rules)

        config = FormConfig(
            name=name,
            type=type_name,
            compound=form_type.compound,
            method=self.context.settings.default_method,
            options=merged,
            attributes=attributes,
            error_bubbling=self.context.settings.error_bubbling,
            rules=rules,
        )
        return FormNode(name, config, context=self.context)

    def _attach(self, node: "FormNode") -> None:
        if node is self or node.is_ancestor_of(self):
            raise NodeOwnershipError(node.name, self.name, "it would create a cycle")
        owner = node.parent
        if owner is not None and owner is not self:
            raise NodeOwnershipError(node.name, self.name, f"it is owned by '{owner.name}'")

        existing = self._children.get(node.name)
        if existing is not None and existing is not node:
            existing._set_parent(None)
        self._children[node.name] = node
        node._set_parent(self)

    def remove(self, name: str) -> "FormNode":
        """Detach a child. Missing names are ignored."""
        child = self._children.pop(name, None)
        if child is not None:
            child._set_parent(None)
        return self

    def has(self, name: str) -> bool:
        return name in self._children

    def get(self, name: str) -> "FormNode":
        """
        Return a direct child.

        Raises:
            ChildNotFoundError: If no child has this name
        """
        try:
            return self._children[name]
        except KeyError:
            raise ChildNotFoundError(name, self.name) from None

    def all(self) -> dict[str, "FormNode"]:
        return dict(self._children)

    def find(self, path: str) -> "FormNode | None":
        """Resolve a dot path of child names below this node, or return None."""
        node: FormNode | None = self
        for part in str(path).split("."):
            node = node._children.get(part)
            if node is None:
                return None
        return node

    def iter_descendants(self) -> Iterator["FormNode"]:
        """Yield every node below this one, depth first."""
        for child in list(self._children.values()):
            yield child
            yield from child.iter_descendants()

    def __getitem__(self, name: str) -> "FormNode":
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __iter__(self) -> Iterator["FormNode"]:
        return iter(list(self._children.values()))

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, type={self._config.type!r}, state={self._state.value!r})"

    # Data binding

    def _leaf_data(self, data: Any) -> dict[str, Any]:
        if isinstance(data, Mapping):
            return dict(data)
        return {VALUE_KEY: data}

    def _compound_data(self, data: Any) -> dict[str, Any]:
        if data is None or isinstance(data, Mapping) or is_sequence(data):
            return as_mapping(data)
        raise FormStructureError(self.name, f"expects mapping data, got {type(data).__name__}")

    def _child_binding(self, child: "FormNode", value: Any) -> Any:
        if not child.is_compound():
            return {VALUE_KEY: value}
        if isinstance(value, Mapping) or is_sequence(value):
            return value
        return {}

    def _child_submission(self, child: "FormNode", value: Any) -> Any:
        if not child.is_compound():
            return {VALUE_KEY: value}
        if isinstance(value, Mapping) or is_sequence(value):
            return value
        return {VALUE_KEY: value}

    def set_data(self, data: Any = None, reset_state: bool = False) -> "FormNode":
        """
        Bind model data to the node and push it down to existing children.

        A rebind keeps the current state, submitted data and errors. Pass
        `reset_state=True` to start a fresh cycle for the whole subtree.

        Params:
            data: Mapping for compound nodes, {"value": v} or a bare value for leaves
            reset_state: Return the subtree to READY before binding

        Returns:
            This node, for chaining

        Raises:
            FormStateError: If the node is still BUILDING
        """
        self._ensure_ready("bind data to")
        event = self._dispatcher.dispatch(FormEvents.PRE_SET_DATA, FormEvent(self, data))
        if reset_state:
            self._reset_cycle()
        self._bind(event.data)
        self._dispatcher.dispatch(FormEvents.POST_SET_DATA, FormEvent(self, dict(self._model_data)))
        return self

    def _bind(self, data: Any) -> None:
        if not self.is_compound():
            self._model_data = self._leaf_data(data)
            return

        self._model_data = self._compound_data(data)
        for name, child in list(self._children.items()):
            child.set_data(self._child_binding(child, self._model_data.get(name)))

    def _reset_cycle(self) -> None:
        self._state = FormState.READY
        self._submitted_data = {}
        self._error_list = ErrorList()
        self._validation_errors = []
        self.visible = True
        for child in self._children.values():
            child._reset_cycle()

    def submit(self, data: Any = None) -> "FormNode":
        """
        Submit data to the node and run the validation cycle.

        Params:
            data: Mapping for compound nodes, {"value": v} or a bare value for leaves

        Returns:
            This node, for chaining

        Raises:
            FormStateError: If the node is still BUILDING
            ValidatorRequiredError: If rules are configured without a validator
        """
        self._ensure_ready("submit")
        event = self._dispatcher.dispatch(FormEvents.PRE_SUBMIT, FormEvent(self, data))
        data = event.data

        outermost = self.parent is None or not self.parent._in_submit
        self._in_submit = True
        try:
            if self.is_compound():
                self._submit_compound(self._compound_data(data))
            else:
                self._submit_leaf(self._leaf_data(data))

            if outermost:
                self._evaluate_dependents()
            self.validate()
        finally:
            self._in_submit = False

        if outermost:
            self._settle_descendant_states()
        errors = self._collect_errors()
        if errors.has_blocking():
            self._state = FormState.INVALID
            self._dispatcher.dispatch(
                FormEvents.VALIDATION_ERROR, FormEvent(self, self.get_data(), {"errors": errors})
            )
        else:
            self._state = FormState.VALID
            self._dispatcher.dispatch(FormEvents.VALIDATION_SUCCESS, FormEvent(self, self.get_data()))

        logger.debug("Submitted %s: %s", self.property_path or self.name, self._state.value)
        self._dispatcher.dispatch(FormEvents.POST_SUBMIT, FormEvent(self, self.get_data()))
        return self

    def _submit_compound(self, data: dict[str, Any]) -> None:
        self._reconcile(data)
        self._submitted_data = data
        self._state = FormState.SUBMITTED
        for name, child in list(self._children.items()):
            if name in data:
                child.submit(self._child_submission(child, data[name]))
        self._dispatcher.dispatch(FormEvents.SUBMIT, FormEvent(self, data))

    def _submit_leaf(self, data: dict[str, Any]) -> None:
        previous = self.value
        self._submitted_data = data
        self._state = FormState.SUBMITTED
        # Listeners may normalize the submitted value
        event = self._dispatcher.dispatch(FormEvents.SUBMIT, FormEvent(self, data))
        if event.data is not data:
            self._submitted_data = self._leaf_data(event.data)

        current = self.value
        if current != previous:
            self._dispatcher.dispatch(
                FieldEvents.VALUE_CHANGE,
                FieldEvent(self, self.root, {"old_value": previous, "new_value": current}),
            )

    def _reconcile(self, data: dict[str, Any]) -> None:
        """Adjust the children to the submitted keys before they are submitted."""

    def _settle_descendant_states(self) -> None:
        # Child POST_SUBMIT listeners may add errors after the child decided its state
        for node in self.iter_descendants():
            if node.is_submitted():
                node._state = FormState.INVALID if node._collect_errors().has_blocking() else FormState.VALID

    def _evaluate_dependents(self) -> None:
        evaluator = self.context.evaluator
        for node in self.iter_descendants():
            if node.has_dependencies():
                evaluator.evaluate(node)

    def handle_request(self, data: Mapping[str, Any]) -> "FormNode":
        """
        Submit request data.

        A root node submits the whole mapping; a child submits its own entry
        only when the mapping contains its name.
        """
        if self.is_root():
            return self.submit(data)
        if self.name in data:
            return self.submit(data[self.name])
        return self

    def get_data(self) -> Any:
        """
        Return the node's current data.

        Submitted compound nodes gather their children's data (nested maps for
        compound children, scalars for leaves); submitted leaves return
        {"value": v}; anything not submitted returns its bound model data.
        """
        if not self.is_submitted():
            return dict(self._model_data)
        if not self.is_compound():
            return dict(self._submitted_data)
        return {
            name: child.get_data() if child.is_compound() else child.value
            for name, child in self._children.items()
        }

    @property
    def model_data(self) -> dict[str, Any]:
        return dict(self._model_data)

    @property
    def submitted_data(self) -> dict[str, Any]:
        return dict(self._submitted_data)

    @property
    def value(self) -> Any:
        """Scalar value of a leaf; compound nodes return their data."""
        if self.is_compound():
            return self.get_data()
        data = self._submitted_data if self.is_submitted() else self._model_data
        return data.get(VALUE_KEY)

    def set_value(self, value: Any) -> "FormNode":
        """
        Replace a leaf's value in its current cycle.

        Dispatches VALUE_SET (listeners may rewrite the "value" context entry),
        then VALUE_CHANGE when the value actually changed.

        Raises:
            FormStructureError: If the node is compound
        """
        if self.is_compound():
            raise FormStructureError(self.name, "set_value() is only available on leaf fields")

        event = self._dispatcher.dispatch(
            FieldEvents.VALUE_SET, FieldEvent(self, self.root, {VALUE_KEY: value})
        )
        value = event.get(VALUE_KEY)
        previous = self.value
        target = self._submitted_data if self.is_submitted() else self._model_data
        target[VALUE_KEY] = value

        if value != previous:
            self._dispatcher.dispatch(
                FieldEvents.VALUE_CHANGE,
                FieldEvent(self, self.root, {"old_value": previous, "new_value": value}),
            )
        return self

    # Validation

    def validate(self) -> LegacyErrors:
        """
        Validate children, then this node.

        Each pass replaces the errors recorded by the previous pass. Errors
        added with `add_error` outside validation stay until cleared. The
        node's validator receives the submitted data (or the model data when
        not submitted); a leaf passes its scalar value.

        Returns:
            Nested legacy error map of the subtree

        Raises:
            ValidatorRequiredError: If rules are configured without a validator
        """
        self._error_list.discard(self._validation_errors)
        recorded = len(self._error_list)
        for child in list(self._children.values()):
            child.validate()

        self._run_validator()
        self._check_constraints()
        if self._dispatcher.has_listeners(FieldEvents.VALIDATE):
            self._dispatcher.dispatch(
                FieldEvents.VALIDATE,
                FieldEvent(
                    self,
                    self.root,
                    {VALUE_KEY: self._validation_value(), "errors": self._error_list},
                ),
            )

        self._validation_errors = self._error_list.all()[recorded:]
        errors = self.get_errors()
        logger.debug("Validated %s: %d error path(s)", self.property_path or self.name, len(errors))
        return errors

    def _check_constraints(self) -> None:
        """Record errors for structural constraints of the node itself."""

    def _validation_value(self) -> Any:
        if not self.is_compound():
            return self.value
        return dict(self._submitted_data if self.is_submitted() else self._model_data)

    def _run_validator(self) -> None:
        if not self._config.validation:
            return

        validator = self._validator
        if validator is None and self._config.has_rules():
            validator = self.context.validator
        if validator is None:
            if self._config.has_rules():
                raise ValidatorRequiredError(self.name)
            return

        result = validator.validate(
            self._validation_value(),
            self._config.rules,
            {"form": self, "root": self.root, "path": self.property_path, "name": self.name},
        )
        self._record_result(result)

    def _record_result(self, result: ValidationResult) -> None:
        for key, messages in result.errors.items():
            for message in _messages(messages):
                self._error_list.add(self._result_error(key, message, ErrorLevel.ERROR, result))
        for key, messages in result.warnings.items():
            for message in _messages(messages):
                self._error_list.add(self._result_error(key, message, ErrorLevel.WARNING, result))

        if not result.is_valid() and not result.has_errors():
            self._error_list.add(FormError(INVALID_MESSAGE, cause=result, origin=self.id))

    def _result_error(
        self, key: str, message: str, level: ErrorLevel, result: ValidationResult
    ) -> FormError:
        if str(key).split(".")[0] in self._children:
            return FormError(message, level, path=str(key), cause=result, origin=self.id)
        return FormError(message, level, parameters={"rule": key}, cause=result, origin=self.id)

    # Errors

    def add_error(
        self,
        message: str | FormError,
        level: ErrorLevel = ErrorLevel.ERROR,
        path: str | None = None,
        parameters: Mapping[str, Any] | None = None,
        cause: Any = None,
    ) -> "FormNode":
        """Record an error on this node."""
        if isinstance(message, FormError):
            error = message
        else:
            error = FormError(message, level, path=path, parameters=parameters, cause=cause, origin=self.id)
        self._error_list.add(error)
        return self

    def _collect_errors(self) -> ErrorList:
        collected = ErrorList(self._error_list)
        for name, child in self._children.items():
            collected = collected.merge(child._collect_errors().prefixed(name))
        return collected

    def get_errors(self) -> LegacyErrors:
        """Nested legacy error map of the whole subtree."""
        return self._collect_errors().to_array()

    def has_errors(self) -> bool:
        return not self._collect_errors().is_empty()

    def get_error_list(self, deep: bool = False) -> ErrorList:
        """
        Return the node's structured errors.

        Params:
            deep: Include child errors according to the bubbling strategy

        Returns:
            The node's own ErrorList, or a new aggregated list when `deep`
        """
        if not deep:
            return self._error_list
        collected = ErrorList(self._error_list)
        for child in self._children.values():
            collected = collected.merge(self._bubbling.collect_errors(self, child))
        return collected

    def get_errors_as_array(self, deep: bool = False) -> LegacyErrors:
        return self.get_error_list(deep).to_array()

    def get_errors_flattened(self, deep: bool = False) -> dict[str, str]:
        return self.get_error_list(deep).to_flat()

    def clear_errors(self, deep: bool = False) -> "FormNode":
        self._error_list = ErrorList()
        self._validation_errors = []
        if deep:
            for child in self._children.values():
                child.clear_errors(deep=True)
        return self

    def get_error_bubbling_strategy(self) -> ErrorBubblingStrategy:
        return self._bubbling

    def set_error_bubbling_strategy(self, strategy: ErrorBubblingStrategy) -> "FormNode":
        self._bubbling = strategy
        return self

    # Events

    def add_event_listener(
        self, event_name: str, listener: Callable[[Any], Any], priority: int = 0
    ) -> "FormNode":
        self._dispatcher.on(event_name, listener, priority)
        return self

    def remove_event_listener(self, event_name: str, listener: Callable[[Any], Any]) -> "FormNode":
        self._dispatcher.off(event_name, listener)
        return self

    def add_event_subscriber(self, subscriber: EventSubscriber) -> "FormNode":
        self._dispatcher.add_subscriber(subscriber)
        return self

    def remove_event_subscriber(self, subscriber: EventSubscriber) -> "FormNode":
        self._dispatcher.remove_subscriber(subscriber)
        return self

    def on_value_change(self, listener: Callable[[FieldEvent], Any], priority: int = 0) -> "FormNode":
        return self.add_event_listener(FieldEvents.VALUE_CHANGE, listener, priority)

    def on_dependency_check(self, predicate: Callable[[FieldEvent], Any], priority: int = 0) -> "FormNode":
        """Register a custom visibility predicate; it sets `event.visible` to override."""
        return self.add_event_listener(FieldEvents.DEPENDENCY_CHECK, predicate, priority)

    # Field state

    def depends_on(self, controller: "FormNode | str", values: Any, group: str | None = None) -> "FormNode":
        """
        Show this field only when the controller holds one of `values`.

        Params:
            controller: Controlling node, or its name / dot path
            values: Expected value, or a sequence of expected values
            group: Optional label exposed to dependency listeners
        """
        self._dependencies.append(Dependency(controller, values, group))
        return self

    @property
    def dependencies(self) -> list[Dependency]:
        return list(self._dependencies)

    def has_dependencies(self) -> bool:
        return bool(self._dependencies)

    def is_visible(self) -> bool:
        return self.visible

    def evaluate_visibility(self) -> bool:
        return self.context.evaluator.evaluate(self)

    def enable(self) -> "FormNode":
        if self._disabled:
            self._disabled = False
            self._dispatcher.dispatch(FieldEvents.ENABLE, FieldEvent(self, self.root, {"disabled": False}))
        return self

    def disable(self) -> "FormNode":
        if not self._disabled:
            self._disabled = True
            self._dispatcher.dispatch(FieldEvents.DISABLE, FieldEvent(self, self.root, {"disabled": True}))
        return self

    def get_choices(self) -> Any:
        """
        Return the field's choices.

        OPTIONS_LOAD listeners may replace the "choices" context entry, e.g.
        to load them from a data source.
        """
        choices = self._config.get_option("choices") or {}
        choices = dict(choices) if isinstance(choices, Mapping) else list(choices)
        event = self._dispatcher.dispatch(
            FieldEvents.OPTIONS_LOAD, FieldEvent(self, self.root, {"choices": choices})
        )
        return event.get("choices")

    # Views

    def view_vars(self, projector: "ViewProjector") -> dict[str, Any]:
        """Extra view variables contributed by specialized nodes."""
        return {}

    def create_view(self) -> "FormView":
        return self.context.projector.project(self)

    def render(self, renderer: "Renderer | None", theme: str | None = None) -> str:
        """
        Project the node to a view and hand it to a renderer.

        Raises:
            FormStructureError: If no renderer is given
        """
        if renderer is None:
            raise FormStructureError(self.name, "no renderer given")
        return renderer.render(self.create_view(), theme)
