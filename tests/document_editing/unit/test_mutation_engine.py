"""Mutation engine tests."""

from __future__ import annotations

import copy
import logging

import pytest
from schema_form_editor.document_editing import (
    AddressKindMismatch,
    get_value,
    insert_array_item,
    remove_array_item,
    set_value,
)
from schema_form_editor.schema_management import (
    ArrayShape,
    NumberLeaf,
    ObjectShape,
    StringLeaf,
    UnsupportedShape,
)

ITEM = ObjectShape(fields={"name": StringLeaf(), "rating": NumberLeaf(minimum=1, maximum=4)})
SCHEMA = ObjectShape(
    fields={
        "title": StringLeaf(),
        "items": ArrayShape(element=ITEM),
        "flags": ArrayShape(element=UnsupportedShape(type_name="boolean")),
    }
)


def test_set_value_copies_only_containers_on_the_path() -> None:
    document = {"a": {"x": 1}, "b": {"y": 2}}
    snapshot = copy.deepcopy(document)

    updated = set_value(document, ("a", "x"), 5)

    assert updated == {"a": {"x": 5}, "b": {"y": 2}}
    assert document == snapshot
    assert updated is not document
    assert updated["a"] is not document["a"]
    assert updated["b"] is document["b"]


def test_set_value_inside_array_leaves_original_array_untouched() -> None:
    document = {"items": [{"name": "a", "rating": 1}, {"name": "b", "rating": 2}]}
    snapshot = copy.deepcopy(document)

    updated = set_value(document, ("items", 1, "rating"), 4)

    assert updated["items"][1]["rating"] == 4
    assert updated["items"][0] is document["items"][0]
    assert document == snapshot


def test_empty_address_replaces_document() -> None:
    assert set_value({"a": 1}, (), ["replacement"]) == ["replacement"]


@pytest.mark.parametrize(
    ("address", "value"),
    [
        (("title",), "Report"),
        (("items", 0, "name"), "PII store"),
        (("items", 2, "rating"), 3),
        (("deep", "nested", "field"), "x"),
    ],
)
def test_round_trip_get_after_set(address: tuple, value: object) -> None:
    document = {"title": "", "items": [{"name": "", "rating": 1}]}

    assert get_value(set_value(document, address, value), address) == value


def test_missing_intermediate_containers_are_created_from_next_segment_kind() -> None:
    updated = set_value({}, ("items", 0, "name"), "x")

    assert updated == {"items": [{"name": "x"}]}


def test_null_intermediate_is_replaced_by_container() -> None:
    assert set_value({"items": None}, ("items", 0), "x") == {"items": ["x"]}


def test_index_past_end_pads_with_null() -> None:
    assert set_value({"items": []}, ("items", 2), "c") == {"items": [None, None, "c"]}


def test_mismatched_container_is_replaced_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    document = {"items": "oops", "meta": [1, 2]}

    with caplog.at_level(logging.WARNING):
        updated = set_value(document, ("items", 0), "x")
        updated = set_value(updated, ("meta", "key"), "v")

    assert updated == {"items": ["x"], "meta": {"key": "v"}}
    assert document == {"items": "oops", "meta": [1, 2]}
    assert "Replacing str at 'items' with an empty array" in caplog.text
    assert "Replacing list at 'meta' with an empty object" in caplog.text


def test_strict_mode_rejects_mismatched_container() -> None:
    with pytest.raises(AddressKindMismatch, match="Expected array at 'items', found str"):
        set_value({"items": "oops"}, ("items", 0), "x", strict=True)


def test_strict_mode_still_creates_missing_containers() -> None:
    assert set_value({}, ("a", "b"), 1, strict=True) == {"a": {"b": 1}}


def test_negative_index_is_rejected() -> None:
    with pytest.raises(ValueError, match="must not be negative"):
        set_value({"items": [1]}, ("items", -1), 2)


def test_insert_array_item_appends_synthesized_element() -> None:
    document = {"title": "", "items": []}
    snapshot = copy.deepcopy(document)

    updated = insert_array_item(SCHEMA, document, ("items",))

    assert updated == {"title": "", "items": [{"name": "", "rating": 1}]}
    assert document == snapshot


def test_insert_array_item_creates_missing_array() -> None:
    assert insert_array_item(SCHEMA, {}, ("items",)) == {"items": [{"name": "", "rating": 1}]}


def test_insert_array_item_with_unsupported_element_appends_null() -> None:
    assert insert_array_item(SCHEMA, {"flags": []}, ("flags",)) == {"flags": [None]}


@pytest.mark.parametrize("address", [("title",), ("missing",), ("items", 0)])
def test_insert_array_item_requires_array_in_schema(address: tuple) -> None:
    with pytest.raises(AddressKindMismatch, match="Schema has no array"):
        insert_array_item(SCHEMA, {"items": [{}]}, address)


def test_insert_array_item_strict_rejects_non_array_value() -> None:
    with pytest.raises(AddressKindMismatch):
        insert_array_item(SCHEMA, {"items": {"0": {}}}, ("items",), strict=True)


def test_remove_array_item_excludes_index() -> None:
    document = {"items": ["a", "b", "c"]}

    updated = remove_array_item(document, ("items",), 1)

    assert updated == {"items": ["a", "c"]}
    assert document == {"items": ["a", "b", "c"]}


@pytest.mark.parametrize("index", [3, -1])
def test_remove_missing_index_is_a_no_op(index: int) -> None:
    document = {"items": ["a", "b", "c"]}

    assert remove_array_item(document, ("items",), index) is document


def test_remove_from_absent_array_is_a_no_op() -> None:
    document = {"title": "x"}

    assert remove_array_item(document, ("items",), 0) is document


def test_strict_remove_rejects_non_array_value() -> None:
    with pytest.raises(AddressKindMismatch):
        remove_array_item({"items": "oops"}, ("items",), 0, strict=True)


def test_insert_then_remove_last_restores_document() -> None:
    document = {"title": "t", "items": [{"name": "a", "rating": 2}]}

    inserted = insert_array_item(SCHEMA, document, ("items",))
    restored = remove_array_item(inserted, ("items",), len(inserted["items"]) - 1)

    assert restored == document
