import pytest

from backend.dates import Unit
from backend.views import (
    DEFAULT_VIEWS, InvalidView, View, ViewDescriptor, is_valid_view,
    normalize_view, resolve, view_names,
)


def render_timeline(context):
    return None


class TestViewNames:
    def test_sequence_keeps_order(self):
        views = [View.DAY, View.MONTH, View.WEEK]
        assert view_names(views) == [View.DAY, View.MONTH, View.WEEK]

    def test_mapping_returns_keys(self):
        views = {"month": True, "agenda": True}
        assert sorted(view_names(views)) == ["agenda", "month"]


class TestResolve:
    @pytest.mark.parametrize("view", DEFAULT_VIEWS)
    def test_configured_views_resolve(self, view):
        assert resolve(view, DEFAULT_VIEWS).name == view

    def test_unconfigured_view_fails(self):
        with pytest.raises(InvalidView) as excinfo:
            resolve("year", [View.MONTH, View.WEEK, View.DAY])
        assert excinfo.value.view == "year"
        assert "year" in str(excinfo.value)

    def test_builtin_but_unconfigured_fails(self):
        with pytest.raises(InvalidView):
            resolve(View.AGENDA, [View.MONTH, View.WEEK, View.DAY])

    def test_strings_and_enum_members_are_interchangeable(self):
        assert resolve("week", [View.WEEK]).granularity == Unit.WEEK
        assert resolve(View.WEEK, ["week"]).granularity == Unit.WEEK

    def test_builtin_granularity(self):
        assert resolve("month", DEFAULT_VIEWS).granularity == Unit.MONTH
        assert resolve("week", DEFAULT_VIEWS).span == 7
        assert resolve("agenda", DEFAULT_VIEWS).granularity == Unit.DAY

    def test_custom_view_in_sequence_has_no_granularity(self):
        descriptor = resolve("timeline", ["month", "timeline"])
        assert descriptor.name == "timeline"
        assert descriptor.granularity is None

    def test_mapping_with_renderer_inherits_builtin_granularity(self):
        descriptor = resolve("week", {"week": render_timeline})
        assert descriptor.renderer is render_timeline
        assert descriptor.granularity == Unit.WEEK

    def test_mapping_with_descriptor(self):
        agenda = ViewDescriptor(View.AGENDA, Unit.DAY, span=30)
        assert resolve("agenda", {"month": True, "agenda": agenda}) is agenda

    def test_mapping_with_unsupported_value(self):
        with pytest.raises(TypeError):
            resolve("month", {"month": 42})


def test_is_valid_view():
    assert is_valid_view("day", DEFAULT_VIEWS)
    assert not is_valid_view("year", DEFAULT_VIEWS)


def test_normalize_view():
    assert normalize_view("month") is View.MONTH
    assert normalize_view("timeline") == "timeline"
