"""Style class references on template lines."""

from template_navigator.resolution import class_references, find_class_reference, resolve_class_name


def _inside(line: str, token: str, occurrence_from: int = 0) -> int:
    return line.index(token, occurrence_from) + 1


class TestStaticClassAttribute:

    def test_cursor_inside_token(self):
        line = '<div class="foo bar" >'

        assert resolve_class_name(line, _inside(line, "bar")) == "bar"
        assert resolve_class_name(line, _inside(line, "foo")) == "foo"

    def test_cursor_outside_tokens(self):
        line = '<div class="foo bar" >'

        assert resolve_class_name(line, 1) is None
        assert resolve_class_name(line, len(line) - 1) is None

    def test_single_quoted_attribute(self):
        line = "<p class='lead muted'>"

        assert resolve_class_name(line, _inside(line, "muted")) == "muted"

    def test_span_is_reported(self):
        line = '<div class="foo bar">'
        reference = find_class_reference(line, _inside(line, "bar"))

        assert line[reference.start:reference.end] == "bar"

    def test_other_attributes_ending_in_class_are_ignored(self):
        line = '<div data-class="foo">'

        assert resolve_class_name(line, _inside(line, "foo")) is None


class TestClassBinding:

    def test_binding_resolves_anywhere_on_line(self):
        line = '<span [class.active]="isActive">Active</span>'

        assert resolve_class_name(line, 0) == "active"
        assert resolve_class_name(line, len(line) - 2) == "active"

    def test_static_token_under_cursor_wins(self):
        line = '<span class="chip" [class.active]="isActive">'

        assert resolve_class_name(line, _inside(line, "chip")) == "chip"
        assert resolve_class_name(line, 1) == "active"


class TestNgClass:

    def test_string_value(self):
        line = '<div [ngClass]="\'big red\'">'

        assert resolve_class_name(line, _inside(line, "red")) == "red"
        assert resolve_class_name(line, _inside(line, "big")) == "big"

    def test_list_value(self):
        line = '<ul [ngClass]="[\'list\', \'compact\']"></ul>'

        assert resolve_class_name(line, _inside(line, "compact")) == "compact"

    def test_list_item_with_several_classes(self):
        line = '<div [ngClass]="[\'card active\', \'wide\']">'

        assert resolve_class_name(line, _inside(line, "card")) == "card"
        assert resolve_class_name(line, _inside(line, "active")) == "active"
        assert resolve_class_name(line, _inside(line, "wide")) == "wide"

    def test_single_quoted_binding_with_double_quoted_string(self):
        line = "<ul [ngClass]='\"wide\"'></ul>"

        assert resolve_class_name(line, _inside(line, "wide")) == "wide"

    def test_object_literal_is_not_resolved(self):
        line = '<div [ngClass]="{\'big\': isBig}">'

        assert resolve_class_name(line, _inside(line, "big")) is None

    def test_cursor_outside_value(self):
        line = '<div [ngClass]="[\'list\']">'

        assert resolve_class_name(line, 1) is None


def test_no_binding_returns_none():
    line = '<app-hero-card [hero]="hero"></app-hero-card>'

    assert resolve_class_name(line, _inside(line, "hero")) is None


def test_class_references_lists_every_form():
    line = '<div class="a b" [class.c]="x" [ngClass]="[\'d\']">'

    assert [r.class_name for r in class_references(line)] == ["a", "b", "c", "d"]
