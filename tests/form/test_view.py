"""
Tests for view projection and rendering.
"""

import pytest

from formtree.events import FieldEvents
from formtree.exceptions import FormStructureError
from formtree.form import FormNode, FormView, Renderer, default_label


class ListRenderer:
    """Renderer producing one line per leaf view."""

    def render(self, view, theme=None):
        lines = []
        for child in view:
            if child.get_var("compound"):
                lines.append(self.render(child, theme))
            else:
                lines.append(f"{theme or 'plain'}:{child.get_var('full_name')}={child.get_var('value')}")
        return "\n".join(lines)


class TestLabels:
    """Default labels derived from field names."""

    @pytest.mark.parametrize(
        "name,label",
        [("first_name", "First name"), ("email", "Email"), ("zipCode", "Zip code")],
    )
    def test_default_label(self, name, label):
        assert default_label(name) == label


class TestProjection:
    """Variables exposed to renderers."""

    def test_leaf_vars(self, user_form):
        user_form.set_data({"name": "Ada"})
        view = user_form.create_view()["name"]

        assert view.name == "name"
        assert view.get_var("value") == "Ada"
        assert view.get_var("label") == "Name"
        assert view.get_var("full_name") == "user[name]"
        assert view.get_var("id") == "user_name"
        assert view.get_var("type") == "text"
        assert view.get_var("required") is False
        assert view.get_var("disabled") is False
        assert view.get_var("compound") is False
        assert view.get_var("submitted") is False
        assert view.get_var("errors") == []
        assert view.get_var("visible") is True

    def test_root_vars(self, user_form):
        view = user_form.create_view()
        assert view.get_var("method") == "POST"
        assert view.get_var("action") == ""
        assert view.get_var("compound") is True
        assert view.get_var("id") == "user"

    def test_configured_options(self):
        form = FormNode("user").add(
            "email",
            "email",
            label="E-mail address",
            required=True,
            help="We never share it",
            attr={"placeholder": "you@example.com"},
            attributes={"class": "input"},
        )
        view = form.create_view()["email"]
        assert view.get_var("label") == "E-mail address"
        assert view.get_var("required") is True
        assert view.get_var("help") == "We never share it"
        assert view.get_var("attr") == {"class": "input", "placeholder": "you@example.com"}

    def test_attr_option_may_be_none(self):
        form = FormNode("user").add("nickname", "text", attr=None, attributes={"class": "input"})
        assert form.create_view()["nickname"].get_var("attr") == {"class": "input"}

    def test_submission_state_and_errors(self, user_form):
        user_form.submit({"name": ""})
        view = user_form.create_view()
        assert view.get_var("submitted") is True
        assert view.get_var("valid") is False
        assert view["name"].get_var("errors") == ["This value should not be blank."]
        assert view["address"]["street"].get_var("errors") == ["This value should not be blank."]

    def test_password_values_are_not_exposed(self):
        form = FormNode("login").add("password", "password")
        form.set_data({"password": "secret"})
        assert form.create_view()["password"].get_var("value") is None

    def test_choices(self):
        form = FormNode("user").add("country", "choice", choices={"TR": "Turkey"}).add("name")
        view = form.create_view()
        assert view["country"].get_var("choices") == {"TR": "Turkey"}
        assert not view["name"].has_var("choices")

    def test_options_load_listener_adds_choices(self):
        form = FormNode("user").add("city")
        form.get("city").add_event_listener(
            FieldEvents.OPTIONS_LOAD, lambda event: event.set("choices", ["Izmir", "Ankara"])
        )
        assert form.create_view()["city"].get_var("choices") == ["Izmir", "Ankara"]

    def test_children_keep_tree_order(self, user_form):
        view = user_form.create_view()
        assert [child.name for child in view] == ["name", "email", "address"]
        assert len(view) == 3
        assert "address" in view
        assert view.get_child("missing") is None


class TestRenderEvents:
    """PRE_RENDER and POST_RENDER."""

    def test_render_event_order(self, user_form, recorder):
        name = user_form.get("name")
        recorder.watch(user_form, FieldEvents.PRE_RENDER, FieldEvents.POST_RENDER)
        recorder.watch(name, FieldEvents.PRE_RENDER, FieldEvents.POST_RENDER)
        user_form.create_view()

        events = [(label, event.field.name) for label, event in recorder.calls]
        assert events == [
            (FieldEvents.PRE_RENDER, "user"),
            (FieldEvents.PRE_RENDER, "name"),
            (FieldEvents.POST_RENDER, "name"),
            (FieldEvents.POST_RENDER, "user"),
        ]

    def test_post_render_can_replace_vars(self, user_form):
        def add_css(event):
            event.set("vars", {**event.get("vars"), "css": "is-highlighted"})

        user_form.get("email").add_event_listener(FieldEvents.POST_RENDER, add_css)
        assert user_form.create_view()["email"].get_var("css") == "is-highlighted"


class TestFormView:
    """Immutable view snapshots."""

    def test_vars_are_read_only(self, user_form):
        view = user_form.create_view()
        with pytest.raises(TypeError):
            view.vars["name"] = "changed"

    def test_views_are_snapshots(self, user_form):
        view = user_form.create_view()
        user_form.get("name").set_value("Ada")
        assert view["name"].get_var("value") is None
        assert user_form.create_view()["name"].get_var("value") == "Ada"

    def test_to_dict(self):
        form = FormNode("user").add("name")
        data = form.create_view().to_dict()
        assert data["vars"]["name"] == "user"
        assert data["children"]["name"]["vars"]["label"] == "Name"
        assert data["children"]["name"]["children"] == {}


class TestRender:
    """Handing views to renderers."""

    def test_render(self, user_form):
        user_form.set_data({"name": "Ada", "address": {"city": "London"}})
        output = user_form.render(ListRenderer(), theme="bootstrap")
        assert output.splitlines() == [
            "bootstrap:user[name]=Ada",
            "bootstrap:user[email]=None",
            "bootstrap:user[address][street]=None",
            "bootstrap:user[address][city]=London",
        ]

    def test_renderer_protocol(self):
        assert isinstance(ListRenderer(), Renderer)

    def test_missing_renderer(self, user_form):
        with pytest.raises(FormStructureError):
            user_form.render(None)

    def test_projection_marks_tree_as_rendered(self, user_form):
        assert not user_form.context.is_rendered(user_form)
        user_form.render(ListRenderer())
        assert user_form.context.is_rendered(user_form.get("name"))

    def test_views_are_form_views(self, user_form):
        assert isinstance(user_form.create_view()["address"], FormView)
