"""
Dynamic collections of form entries.

A `FormCollection` is a compound node whose children are entries keyed by
their index. Entries are rebuilt on every bind, and reconciled against the
submitted keys on submit:

    collection = FormCollection("items", lambda entry: entry.add("product").add("qty", "integer"))
    collection.set_data([{"product": "Pen", "qty": 2}])
    collection.submit({"0": {"product": "Pen", "qty": 3}, "5": {"product": "Ink", "qty": 1}})
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from formtree.core import FormConfig, FormContext
from formtree.errors import FormError
from formtree.events import EventSubscriber
from formtree.exceptions import FormStructureError
from formtree.form.node import FormNode, as_mapping, is_sequence
from formtree.validation import Validator

if TYPE_CHECKING:
    from formtree.form.view import ViewProjector

logger = logging.getLogger(__name__)

COLLECTION_ERROR_KEY = "_collection"

PrototypeBuilder = Callable[[FormNode], Any]


class FormCollection(FormNode):
    """
    Compound node managing a keyed, dynamically sized list of entries.

    Params:
        name: Collection name
        prototype_builder: Callable populating each new entry (and the prototype)
        entry_type: Field type of the entries; "form" entries are compound
        entry_options: Options given to every entry
        min: Minimum number of entries (0 = no minimum)
        max: Maximum number of entries (0 = unlimited)
        allow_add: Create entries for new keys on submit
        allow_delete: Remove entries whose keys are missing on submit
        config: Collection configuration; must be compound
        context: Build context shared by the tree
        validator: Validator for the collection itself
        subscribers: Event subscribers of the collection
        build: Build callable, as for `FormNode`
    """

    def __init__(
        self,
        name: str,
        prototype_builder: PrototypeBuilder | None = None,
        *,
        entry_type: str = "form",
        entry_options: Mapping[str, Any] | None = None,
        min: int = 0,
        max: int = 0,
        allow_add: bool = True,
        allow_delete: bool = True,
        config: FormConfig | None = None,
        context: FormContext | None = None,
        validator: Validator | None = None,
        subscribers: Iterable[EventSubscriber] = (),
        build: Callable[[FormNode], Any] | None = None,
    ):
        context = context or FormContext()
        if config is None:
            config = FormConfig(
                name=name,
                type="collection",
                compound=True,
                method=context.settings.default_method,
                error_bubbling=context.settings.error_bubbling,
            )
        elif not config.compound:
            raise FormStructureError(name, "a collection must be compound")

        self.prototype_builder = prototype_builder
        self.entry_type = entry_type
        self.entry_options = dict(entry_options or {})
        self.min = min
        self.max = max
        self.allow_add = allow_add
        self.allow_delete = allow_delete
        self._prototype: FormNode | None = None

        super().__init__(
            name,
            config,
            context=context,
            validator=validator,
            subscribers=subscribers,
            build=build,
        )

    @classmethod
    def from_options(
        cls,
        name: str,
        options: Mapping[str, Any],
        *,
        context: FormContext | None = None,
        rules: Any = None,
    ) -> "FormCollection":
        """
        Create a collection from field options, as done by `FormNode.add()`.

        The options "prototype", "entry_type", "entry_options", "min", "max",
        "allow_add" and "allow_delete" configure the collection; the rest
        become the collection's own options.
        """
        context = context or FormContext()
        options = dict(options)
        settings = {
            "prototype_builder": options.pop("prototype", None),
            "entry_type": options.pop("entry_type", "form"),
            "entry_options": options.pop("entry_options", None),
            "min": int(options.pop("min", 0)),
            "max": int(options.pop("max", 0)),
            "allow_add": bool(options.pop("allow_add", True)),
            "allow_delete": bool(options.pop("allow_delete", True)),
        }
        config = FormConfig(
            name=name,
            type="collection",
            compound=True,
            method=context.settings.default_method,
            options=options,
            error_bubbling=context.settings.error_bubbling,
            rules=rules,
        )
        return cls(name, config=config, context=context, **settings)

    # Entries

    def _create_entry(self, key: str) -> FormNode:
        form_type = self.context.resolve_type(self.entry_type)
        options = self.context.resolve_options(self.entry_type, self.entry_options)
        rules = options.pop("rules", None)
        config = FormConfig(
            name=key,
            type=self.entry_type,
            compound=form_type.compound,
            method=self.context.settings.default_method,
            options=options,
            error_bubbling=self.context.settings.error_bubbling,
            rules=rules,
        )
        build = self.prototype_builder if form_type.compound else None
        return FormNode(key, config, context=self.context, build=build)

    def add_entry(self, index: int | str, data: Any = None) -> FormNode:
        """
        Create an entry, bind `data` to it and attach it under `str(index)`.

        An existing entry with the same key is replaced.

        Returns:
            The new entry
        """
        key = str(index)
        entry = self._create_entry(key)
        if data is not None:
            entry.set_data(self._child_binding(entry, data))
        self.add(entry)
        return entry

    def remove_entry(self, index: int | str) -> "FormCollection":
        return self.remove(index)

    def remove(self, name: int | str) -> "FormCollection":
        super().remove(str(name))
        return self

    def has(self, name: int | str) -> bool:
        return super().has(str(name))

    def get(self, name: int | str) -> FormNode:
        """Return the entry at an index, given as int or str."""
        return super().get(str(name))

    def __contains__(self, name: object) -> bool:
        return self.has(name) if isinstance(name, (int, str)) else False

    def get_entries(self) -> dict[str, FormNode]:
        return self.all()

    def count_entries(self) -> int:
        return len(self)

    def can_add(self) -> bool:
        if not self.allow_add:
            return False
        return not (self.max > 0 and self.count_entries() >= self.max)

    def can_delete(self) -> bool:
        if not self.allow_delete:
            return False
        return not (self.min > 0 and self.count_entries() <= self.min)

    def get_prototype(self) -> FormNode:
        """
        Return the template entry, built once on first access.

        The prototype is named after `FormSettings.prototype_name` and is never
        attached to the collection.
        """
        if self._prototype is None:
            self._prototype = self._create_entry(self.context.settings.prototype_name)
        return self._prototype

    # Lifecycle

    def _compound_data(self, data: Any) -> dict[str, Any]:
        if data is None or isinstance(data, Mapping) or is_sequence(data):
            return {str(key): value for key, value in as_mapping(data).items()}
        raise FormStructureError(self.name, f"expects a list or mapping of entries, got {type(data).__name__}")

    def _bind(self, data: Any) -> None:
        entries = self._compound_data(data)
        for key in list(self._children):
            self.remove(key)
        for key, value in entries.items():
            self.add_entry(key, value)
        self._model_data = entries
        logger.debug("Rebuilt collection %s with %d entries", self.property_path or self.name, len(entries))

    def _reconcile(self, data: dict[str, Any]) -> None:
        current = list(self._children)
        removed = []
        added = []

        if self.allow_delete:
            removed = [key for key in current if key not in data]
            for key in removed:
                self.remove_entry(key)

        if self.allow_add:
            added = [key for key in data if key not in current]
            for key in added:
                self.add_entry(key)

        if removed or added:
            logger.debug(
                "Reconciled collection %s: removed %s, added %s",
                self.property_path or self.name,
                removed,
                added,
            )

    def _check_constraints(self) -> None:
        count = self.count_entries()
        message = None
        if self.min > 0 and count < self.min:
            message = f"Collection must have at least {self.min} entries, got {count}"
        if self.max > 0 and count > self.max:
            message = f"Collection must have at most {self.max} entries, got {count}"

        if message is not None:
            self.add_error(
                FormError(
                    message,
                    path=COLLECTION_ERROR_KEY,
                    parameters={"min": self.min, "max": self.max, "count": count},
                    origin=self.id,
                )
            )

    def view_vars(self, projector: "ViewProjector") -> dict[str, Any]:
        return {
            "allow_add": self.allow_add,
            "allow_delete": self.allow_delete,
            "min": self.min,
            "max": self.max,
            "prototype": projector.build_view(self.get_prototype()),
        }
