"""
Immutable configuration models for form nodes and form building.

`FormConfig` describes a single node and is fixed at construction.
`FormSettings` carries the defaults applied by a `FormContext` when it
creates nodes.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


def _normalize_method(value: str) -> str:
    method = value.upper()
    if method not in HTTP_METHODS:
        raise ValueError(
            f"Unsupported method '{value}'. Expected one of: {', '.join(sorted(HTTP_METHODS))}"
        )
    return method


class FormConfig(BaseModel):
    """Immutable configuration of one form node.

    Params:
        name: Node name, also its key in the parent's child map
        type: Field type tag (e.g. "text", "form", "collection")
        compound: Whether the node holds children and derives its data from them
        method: Submission method metadata, exposed to the view
        action: Submission target metadata, exposed to the view
        options: Free-form options (label, required, attr, choices, help, ...)
        attributes: Extra attributes merged into the view's `attr`
        validation: Whether the node's validator runs during validation
        error_bubbling: Whether deep error reads walk into children
        rules: Opaque rules handed to the validator
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    type: str = "form"
    compound: bool = False
    method: str = "POST"
    action: str = ""
    options: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    attributes: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    validation: bool = True
    error_bubbling: bool = True
    rules: Any = None

    @field_validator("method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        return _normalize_method(value)

    @field_validator("options", "attributes")
    @classmethod
    def _freeze_mapping(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    def get_option(self, key: str, default: Any = None) -> Any:
        """Return an option value, or `default` when it is not set."""
        return self.options.get(key, default)

    def has_option(self, key: str) -> bool:
        return key in self.options

    def has_rules(self) -> bool:
        """Check whether validation rules were configured for this node."""
        return self.rules is not None and self.rules != "" and self.rules != {}


class FormSettings(BaseModel):
    """Defaults applied by a build context to the nodes it creates.

    Params:
        default_method: Method used for compound nodes built without a config
        error_bubbling: Default error bubbling for new nodes
        prototype_name: Placeholder name given to collection prototypes
        strict_types: Reject field types that are not registered
        log_events: Log every event dispatch at DEBUG level
    """

    model_config = ConfigDict(frozen=True)

    default_method: str = "POST"
    error_bubbling: bool = True
    prototype_name: str = "__name__"
    strict_types: bool = True
    log_events: bool = False

    @field_validator("default_method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        return _normalize_method(value)
