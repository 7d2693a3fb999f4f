from datetime import date

from it_assets.utils.diff import (
    BOOKKEEPING_FIELDS, compute_diff, display_value, render_changes, serialize_value,
)


def test_serialize_value_normalizes_types():
    assert serialize_value(None) is None
    assert serialize_value(True) == "true"
    assert serialize_value(False) == "false"
    assert serialize_value(5) == "5"
    assert serialize_value(date(2024, 1, 2)) == "2024-01-02"
    assert serialize_value({"b": 1, "a": 2}) == '{"a":2,"b":1}'


def test_alice_internet_access_diff():
    old = {"id": 1, "name": "Alice", "internet_access": True, "updated_at": "2024-01-01T00:00:00"}
    new = {"id": 1, "name": "Alice", "internet_access": False, "updated_at": "2024-01-02T00:00:00"}

    diff = compute_diff(old, new)
    assert diff == {"internet_access": {"old": "true", "new": "false"}}

    lines = render_changes(diff)
    assert [(c.label, c.old, c.new) for c in lines] == [("Internet Access", "Yes", "No")]


def test_updated_at_is_never_in_diff():
    diff = compute_diff({"updated_at": "a"}, {"updated_at": "b"}, exclude=())
    assert diff == {}


def test_missing_side_returns_none():
    assert compute_diff(None, {"name": "x"}) is None
    assert compute_diff({"name": "x"}, None) is None


def test_keys_from_both_sides_are_compared():
    diff = compute_diff({"name": "A"}, {"name": "A", "section": "Ops"})
    assert diff == {"section": {"old": None, "new": "Ops"}}


def test_bookkeeping_fields_excluded_for_notifications():
    diff = compute_diff(
        {"id": 1, "created_at": "x", "name": "A"},
        {"id": 2, "created_at": "y", "name": "A"},
        exclude=BOOKKEEPING_FIELDS,
    )
    assert diff == {}


def test_display_value_and_unknown_label():
    assert display_value(None) == "Not set"
    lines = render_changes({"legacy_col": {"old": None, "new": "1"}})
    assert lines[0].label == "legacy_col"
    assert lines[0].old == "Not set"
