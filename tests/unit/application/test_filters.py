"""Unit tests for filter fields, schemas and filter sets."""

from __future__ import annotations

import pytest
from hypothesis import given

from resops.application.filters import ALL, FieldKind, FilterField, FilterSchema, FilterSet
from resops.kernel.errors import ValidationError
from resops.testing.generators import filter_set_strategy, raw_filters_strategy

SCHEMA = FilterSchema(
    [
        FilterField("search", FieldKind.TEXT),
        FilterField("status", FieldKind.SINGLE),
        FilterField("managers", FieldKind.MULTI, param="manager", column="manager"),
        FilterField("tags", FieldKind.MULTI),
    ]
)


# ---------------------------------------------------------------------------
# FilterField
# ---------------------------------------------------------------------------


class TestFilterField:
    def test_param_and_column_default_to_name(self) -> None:
        f = FilterField("status", FieldKind.SINGLE)
        assert f.param_name == "status"
        assert f.column_name == "status"

    def test_param_and_column_overrides(self) -> None:
        f = SCHEMA["managers"]
        assert f.param_name == "manager"
        assert f.column_name == "manager"

    @pytest.mark.parametrize("raw", [None, "", "ALL", "all", " All ", True])
    def test_single_unset_tokens(self, raw: object) -> None:
        assert FilterField("s", FieldKind.SINGLE).coerce(raw) is None

    def test_single_value_is_stringified(self) -> None:
        assert FilterField("s", FieldKind.SINGLE).coerce(7) == "7"

    def test_multi_drops_blank_members(self) -> None:
        assert FilterField("m", FieldKind.MULTI).coerce(["a", "", " ", "b", "a"]) == frozenset({"a", "b"})

    def test_multi_rejects_plain_string(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            FilterField("m", FieldKind.MULTI).coerce("Alice")
        assert exc_info.value.field == "m"

    def test_text_none_is_empty(self) -> None:
        assert FilterField("q", FieldKind.TEXT).coerce(None) == ""

    def test_text_is_trimmed(self) -> None:
        f = FilterField("q", FieldKind.TEXT)
        assert f.coerce(" acme  ") == "acme"
        assert SCHEMA.normalize({"search": "abc "}) == SCHEMA.normalize({"search": "abc"})

    @pytest.mark.parametrize(
        ("stored", "expected"),
        [
            ("Alice", frozenset({"Alice"})),
            ("ALL", frozenset()),
            ("", frozenset()),
            (7, frozenset({"7"})),
            ({"id": 1}, frozenset()),
            (["Bob", ""], frozenset({"Bob"})),
        ],
    )
    def test_multi_restore_tolerates_stored_shapes(self, stored: object, expected: frozenset) -> None:
        assert FilterField("m", FieldKind.MULTI).restore(stored) == expected

    @pytest.mark.parametrize(
        ("stored", "expected"),
        [(["active"], "active"), (["a", "b"], None), ({"x": 1}, None), ("ALL", None), (3, "3")],
    )
    def test_single_restore_tolerates_stored_shapes(self, stored: object, expected: str | None) -> None:
        assert FilterField("s", FieldKind.SINGLE).restore(stored) == expected

    def test_control_shows_all_for_unset_single(self) -> None:
        f = FilterField("s", FieldKind.SINGLE)
        assert f.to_control(None) == ALL
        assert f.from_control(ALL) is None
        assert f.to_control("active") == "active"

    def test_control_sorts_multi(self) -> None:
        assert FilterField("m", FieldKind.MULTI).to_control(frozenset({"b", "a"})) == ["a", "b"]


class TestFilterSchema:
    def test_duplicate_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FilterSchema([FilterField("a", FieldKind.SINGLE), FilterField("a", FieldKind.MULTI)])

    def test_at_most_one_text_field(self) -> None:
        with pytest.raises(ValidationError):
            FilterSchema([FilterField("a", FieldKind.TEXT), FilterField("b", FieldKind.TEXT)])

    def test_search_field(self) -> None:
        assert SCHEMA.search_field is SCHEMA["search"]
        assert FilterSchema([FilterField("s", FieldKind.SINGLE)]).search_field is None

    def test_unknown_field_lookup(self) -> None:
        with pytest.raises(ValidationError):
            SCHEMA["nope"]

    def test_iteration_keeps_declaration_order(self) -> None:
        assert [f.name for f in SCHEMA] == ["search", "status", "managers", "tags"]
        assert len(SCHEMA) == 4
        assert "status" in SCHEMA


# ---------------------------------------------------------------------------
# FilterSet
# ---------------------------------------------------------------------------


class TestFilterSet:
    def test_empty_holds_every_field(self) -> None:
        fs = SCHEMA.empty()
        assert dict(fs) == {"search": "", "status": None, "managers": frozenset(), "tags": frozenset()}
        assert not fs.is_active()

    def test_unknown_keys_are_dropped(self) -> None:
        fs = SCHEMA.normalize({"status": "active", "legacy": "x"})
        assert "legacy" not in fs
        assert fs["status"] == "active"

    def test_multi_order_does_not_matter(self) -> None:
        a = SCHEMA.normalize({"managers": ["Bob", "Alice"]})
        b = SCHEMA.normalize({"managers": ("Alice", "Bob")})
        assert a == b
        assert hash(a) == hash(b)
        assert a.canonical() == b.canonical()

    def test_all_and_missing_single_are_equal(self) -> None:
        assert SCHEMA.normalize({"status": ALL}) == SCHEMA.empty()

    def test_not_equal_to_plain_dict(self) -> None:
        assert SCHEMA.empty() != {}

    def test_replace_normalises(self) -> None:
        fs = SCHEMA.empty().replace(status="ALL", tags=["x"])
        assert fs["status"] is None
        assert fs["tags"] == frozenset({"x"})

    def test_replace_unknown_field(self) -> None:
        with pytest.raises(ValidationError):
            SCHEMA.empty().replace(nope=1)

    def test_with_search(self) -> None:
        fs = SCHEMA.empty().with_search("acme")
        assert fs.search == "acme"
        assert fs.is_active()

    def test_with_search_without_text_field(self) -> None:
        schema = FilterSchema([FilterField("s", FieldKind.SINGLE)])
        fs = schema.empty()
        assert fs.with_search("x") is fs
        assert fs.search == ""

    def test_blank_search_is_not_active(self) -> None:
        assert not SCHEMA.normalize({"search": "   "}).is_active()

    def test_query_params_repeat_multi_members(self) -> None:
        fs = SCHEMA.normalize({"managers": ["Bob", "Alice"], "status": "active", "search": " acme "})
        assert fs.to_query_params() == [
            ("search", "acme"),
            ("status", "active"),
            ("manager", "Alice"),
            ("manager", "Bob"),
        ]

    def test_query_params_omit_unset(self) -> None:
        assert SCHEMA.normalize({"status": ALL, "search": "  "}).to_query_params() == []

    def test_query_params_without_search(self) -> None:
        fs = SCHEMA.normalize({"search": "acme", "tags": ["x"]})
        assert fs.to_query_params(include_search=False) == [("tags", "x")]

    def test_json_round_trip(self) -> None:
        fs = SCHEMA.normalize({"managers": ["Bob", "Alice"], "status": "active"})
        data = fs.to_json()
        assert data["managers"] == ["Alice", "Bob"]
        assert FilterSet.from_json(SCHEMA, data) == fs

    def test_from_json_non_mapping_is_empty(self) -> None:
        assert FilterSet.from_json(SCHEMA, ["not", "a", "dict"]) == SCHEMA.empty()

    def test_from_json_reads_legacy_layouts(self) -> None:
        fs = FilterSet.from_json(SCHEMA, {"managers": "Alice", "tags": "ALL", "status": ["active"]})
        assert fs == SCHEMA.normalize({"managers": ["Alice"], "status": "active"})

    def test_repr_shows_canonical_form(self) -> None:
        assert repr(SCHEMA.empty()).startswith("FilterSet({")


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestFilterSetProperties:
    @given(raw_filters_strategy(SCHEMA))
    def test_normalize_is_idempotent(self, raw: dict) -> None:
        once = SCHEMA.normalize(raw)
        assert SCHEMA.normalize(dict(once)) == once
        assert FilterSet.from_json(SCHEMA, once.to_json()) == once

    @given(filter_set_strategy(SCHEMA))
    def test_all_token_never_reaches_the_wire(self, fs: FilterSet) -> None:
        for key, value in fs.to_query_params(include_search=False):
            assert value.lower() != "all"
            assert value.strip()
            assert key in {"status", "manager", "tags"}

    @given(filter_set_strategy(SCHEMA))
    def test_active_iff_params_present(self, fs: FilterSet) -> None:
        assert fs.is_active() == bool(fs.to_query_params())
