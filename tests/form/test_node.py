"""
Tests for FormNode structure, data binding and the submit cycle.

Focus Areas:
1. Tree composition and exclusive ownership
2. Data binding and propagation to children
3. Submission, state transitions and data gathering
"""

import gc

import pytest

from formtree.core import FormConfig, FormContext, FormSettings, FormState
from formtree.exceptions import (
    ChildNotFoundError,
    FormStateError,
    FormStructureError,
    NodeOwnershipError,
    UnknownFormTypeError,
)
from formtree.form import FormNode


VALID_USER = {
    "name": "Ada",
    "email": "ada@example.com",
    "address": {"street": "Main Street 1", "city": "London"},
}


class TestConstruction:
    """Node creation and the build phase."""

    def test_default_root_is_compound_form(self):
        form = FormNode("user")
        assert form.is_compound()
        assert form.config.type == "form"
        assert form.state is FormState.READY
        assert form.is_root()
        assert form.is_empty()

    def test_metadata(self):
        form = FormNode("user", metadata={"source": "signup"})
        form.metadata["step"] = 2
        assert form.metadata == {"source": "signup", "step": 2}
        assert FormNode("other").metadata == {}

    def test_default_method_from_settings(self):
        form = FormNode("search", context=FormContext(settings=FormSettings(default_method="get")))
        assert form.config.method == "GET"

    def test_config_name_must_match(self):
        with pytest.raises(FormStructureError):
            FormNode("user", FormConfig(name="account", compound=True))

    def test_ids_are_unique(self):
        assert FormNode("a").id != FormNode("a").id

    def test_build_callable_runs_while_building(self):
        states = []

        def build(form):
            states.append(form.state)
            form.add("name")

        form = FormNode("user", build=build)
        assert states == [FormState.BUILDING]
        assert form.has("name")
        assert form.state is FormState.READY

    @pytest.mark.parametrize("operation", ["submit", "set_data"])
    def test_data_operations_rejected_while_building(self, operation):
        raised = []

        def build(form):
            try:
                getattr(form, operation)({})
            except FormStateError as exc:
                raised.append(exc)

        FormNode("user", build=build)
        assert len(raised) == 1
        assert raised[0].state is FormState.BUILDING


class TestTreeStructure:
    """Adding, removing and looking up children."""

    def test_add_is_fluent_and_creates_typed_children(self):
        form = FormNode("user").add("name").add("email", "email").add("address", "form")
        assert list(form.all()) == ["name", "email", "address"]
        assert form.get("email").config.type == "email"
        assert not form.get("name").is_compound()
        assert form.get("address").is_compound()

    def test_add_merges_options(self):
        form = FormNode("user").add("name", "text", {"label": "Full name"}, required=True)
        assert form.get("name").config.options == {"label": "Full name", "required": True}

    def test_rules_option_becomes_config_rules(self):
        form = FormNode("user").add("name", rules="required")
        name = form.get("name")
        assert name.config.rules == "required"
        assert "rules" not in name.config.options

    def test_type_defaults_are_applied(self):
        form = FormNode("user").add("secret", "password")
        assert form.get("secret").config.get_option("always_empty") is True

    def test_unknown_type(self):
        with pytest.raises(UnknownFormTypeError):
            FormNode("user").add("volume", "slider")

    def test_add_to_leaf_raises(self):
        form = FormNode("user").add("name")
        with pytest.raises(FormStructureError):
            form.get("name").add("first")

    def test_attach_existing_node(self):
        form = FormNode("user")
        address = FormNode("address").add("street")
        form.add(address)
        assert form.get("address") is address
        assert address.parent is form
        assert address.get("street").root is form

    def test_node_cannot_have_two_parents(self):
        first = FormNode("first")
        second = FormNode("second")
        shared = FormNode("shared")
        first.add(shared)
        with pytest.raises(NodeOwnershipError):
            second.add(shared)
        assert shared.parent is first

    def test_cycles_are_rejected(self):
        form = FormNode("user").add("address", "form")
        address = form.get("address")
        with pytest.raises(NodeOwnershipError):
            address.add(form)
        with pytest.raises(NodeOwnershipError):
            form.add(form)

    def test_re_adding_same_child_is_a_no_op(self):
        form = FormNode("user")
        name = FormNode("name", FormConfig(name="name"))
        form.add(name).add(name)
        assert form.all() == {"name": name}

    def test_replacing_a_child_detaches_the_old_one(self):
        form = FormNode("user").add("name")
        old = form.get("name")
        form.add("name", "textarea")
        assert old.parent is None
        assert form.get("name").config.type == "textarea"

    def test_remove_clears_parent(self):
        form = FormNode("user").add("name")
        name = form.get("name")
        form.remove("name")
        assert not form.has("name")
        assert name.parent is None
        assert name.is_root()
        FormNode("other").add(name)

    def test_remove_missing_is_ignored(self):
        form = FormNode("user")
        assert form.remove("missing") is form

    def test_get_missing_names_both_nodes(self):
        form = FormNode("user")
        with pytest.raises(ChildNotFoundError) as exc_info:
            form.get("email")
        assert "email" in str(exc_info.value)
        assert "user" in str(exc_info.value)

    def test_container_protocol(self):
        form = FormNode("user").add("name").add("email")
        assert "name" in form
        assert len(form) == 2
        assert [child.name for child in form] == ["name", "email"]
        assert form["email"] is form.get("email")

    def test_find_dot_paths(self, user_form):
        assert user_form.find("address.street").name == "street"
        assert user_form.find("address.zip") is None
        assert user_form.find("name.first") is None

    def test_paths_and_names(self, user_form):
        street = user_form.find("address.street")
        assert street.property_path == "address.street"
        assert street.full_name == "user[address][street]"
        assert user_form.property_path == ""
        assert user_form.full_name == "user"
        assert street.root is user_form

    def test_parent_reference_is_weak(self):
        form = FormNode("user").add("name")
        name = form.get("name")
        del form
        gc.collect()
        assert name.parent is None


class TestDataBinding:
    """set_data propagation and rebinding."""

    def test_set_data_propagates_to_children(self, user_form):
        user_form.set_data(VALID_USER)
        assert user_form.get("name").value == "Ada"
        assert user_form.get("name").get_data() == {"value": "Ada"}
        assert user_form.get("address").get_data() == {"street": "Main Street 1", "city": "London"}
        assert user_form.find("address.city").value == "London"

    def test_get_data_returns_model_data_unchanged(self, user_form):
        data = {**VALID_USER, "extra": "kept"}
        user_form.set_data(data)
        assert user_form.get_data() == data

    def test_missing_and_non_mapping_slices(self, user_form):
        user_form.set_data({"address": "not a mapping"})
        assert user_form.get("address").get_data() == {}
        assert user_form.get("name").value is None

    def test_set_data_never_creates_children(self, user_form):
        user_form.set_data({"nickname": "ada"})
        assert not user_form.has("nickname")

    def test_leaf_accepts_bare_values(self):
        form = FormNode("user").add("name")
        form.get("name").set_data("Ada")
        assert form.get("name").value == "Ada"

    def test_compound_rejects_scalars(self):
        with pytest.raises(FormStructureError):
            FormNode("user").set_data(42)

    def test_rebind_keeps_submitted_state(self, user_form):
        user_form.submit(VALID_USER)
        user_form.set_data({"name": "Grace"})
        assert user_form.state is FormState.VALID
        assert user_form.is_submitted()

    def test_rebind_with_reset_starts_new_cycle(self, user_form):
        user_form.submit({"name": ""})
        assert user_form.has_errors()

        user_form.set_data({"name": "Grace"}, reset_state=True)
        assert user_form.state is FormState.READY
        assert user_form.get("name").state is FormState.READY
        assert not user_form.has_errors()
        assert user_form.get_data() == {"name": "Grace"}
        assert user_form.get("name").value == "Grace"


class TestSubmit:
    """Submission, state transitions and gathered data."""

    def test_valid_submission(self, user_form):
        user_form.submit(VALID_USER)
        assert user_form.state is FormState.VALID
        assert user_form.is_valid()
        assert user_form.get_data() == VALID_USER
        assert user_form.get("address").state is FormState.VALID

    def test_invalid_submission(self, user_form):
        user_form.submit({"name": "", "address": {"street": ""}})
        assert user_form.state is FormState.INVALID
        assert not user_form.is_valid()
        assert user_form.get("name").state is FormState.INVALID
        assert user_form.get("address").state is FormState.INVALID

    def test_children_absent_from_data_are_not_submitted(self, user_form):
        user_form.submit({"name": "Ada", "address": {"street": "Main"}})
        assert user_form.get("email").state is FormState.READY
        assert user_form.get_data() == {
            "name": "Ada",
            "email": None,
            "address": {"street": "Main", "city": None},
        }

    def test_leaf_children_receive_wrapped_values(self, user_form):
        user_form.submit(VALID_USER)
        name = user_form.get("name")
        assert name.submitted_data == {"value": "Ada"}
        assert name.get_data() == {"value": "Ada"}
        assert name.value == "Ada"

    def test_leaf_submit_accepts_bare_values(self):
        form = FormNode("user").add("name")
        name = form.get("name")
        name.submit("Ada")
        assert name.value == "Ada"
        assert name.is_valid()

    def test_scalar_for_compound_child_is_wrapped(self, user_form):
        user_form.submit({"name": "Ada", "address": "Main Street"})
        assert user_form.get("address").submitted_data == {"value": "Main Street"}

    def test_submitted_values_win_over_model(self, user_form):
        user_form.set_data(VALID_USER)
        user_form.submit({**VALID_USER, "name": "Grace"})
        assert user_form.get("name").value == "Grace"
        assert user_form.get("name").model_data == {"value": "Ada"}

    def test_submit_returns_self(self, user_form):
        assert user_form.submit(VALID_USER) is user_form

    def test_resubmission(self, user_form):
        user_form.submit({"name": ""})
        assert user_form.state is FormState.INVALID
        user_form.submit(VALID_USER)
        assert user_form.state is FormState.VALID
        assert not user_form.has_errors()

    def test_handle_request_on_root(self, user_form):
        user_form.handle_request(VALID_USER)
        assert user_form.is_valid()

    def test_handle_request_on_child(self, user_form):
        address = user_form.get("address")
        address.handle_request({"address": {"street": "Main"}})
        assert address.is_submitted()
        assert not user_form.is_submitted()

        city = address.get("city")
        city.handle_request({"street": "ignored"})
        assert not city.is_submitted()


class TestValues:
    """Scalar access to leaf values."""

    def test_compound_value_is_its_data(self, user_form):
        user_form.set_data(VALID_USER)
        assert user_form.get("address").value == VALID_USER["address"]

    def test_set_value_before_and_after_submit(self, user_form):
        name = user_form.get("name")
        name.set_value("Ada")
        assert name.model_data == {"value": "Ada"}

        user_form.submit(VALID_USER)
        name.set_value("Grace")
        assert user_form.get_data()["name"] == "Grace"

    def test_set_value_on_compound_raises(self, user_form):
        with pytest.raises(FormStructureError):
            user_form.get("address").set_value("x")

    def test_enable_and_disable(self):
        form = FormNode("user").add("name", disabled=True)
        name = form.get("name")
        assert name.disabled
        name.enable()
        assert not name.disabled
        name.disable()
        assert name.disabled
