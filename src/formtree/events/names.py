"""
Event names dispatched during a form node's lifecycle.

Names are plain strings so any listener can subscribe to them, including
names that are not declared here.
"""


class FormEvents:
    """Form level lifecycle events, dispatched with a `FormEvent`."""

    PRE_SET_DATA = "form.pre_set_data"  # Listener may replace the bound data
    POST_SET_DATA = "form.post_set_data"
    PRE_SUBMIT = "form.pre_submit"  # Listener may rewrite the submitted data
    SUBMIT = "form.submit"  # Children submitted, validation not yet run
    POST_SUBMIT = "form.post_submit"
    PRE_BUILD = "form.pre_build"
    POST_BUILD = "form.post_build"
    VALIDATION_ERROR = "form.validation_error"
    VALIDATION_SUCCESS = "form.validation_success"

    @classmethod
    def all(cls) -> frozenset[str]:
        return frozenset(
            value for key, value in vars(cls).items() if key.isupper() and isinstance(value, str)
        )


class FieldEvents:
    """Field level events, dispatched with a `FieldEvent`."""

    VALUE_CHANGE = "field.value_change"
    SHOW = "field.show"
    HIDE = "field.hide"
    ENABLE = "field.enable"
    DISABLE = "field.disable"
    VALIDATE = "field.validate"
    PRE_RENDER = "field.pre_render"
    POST_RENDER = "field.post_render"  # Listener may replace the "vars" context entry
    DEPENDENCY_CHECK = "field.dependency_check"  # Listener may override "visible"
    DEPENDENCY_MET = "field.dependency_met"
    DEPENDENCY_NOT_MET = "field.dependency_not_met"
    VALUE_SET = "field.value_set"
    OPTIONS_LOAD = "field.options_load"  # Listener may replace the "choices" context entry

    @classmethod
    def all(cls) -> frozenset[str]:
        return frozenset(
            value for key, value in vars(cls).items() if key.isupper() and isinstance(value, str)
        )
