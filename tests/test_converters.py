"""
Tests for formatkit converters.

Covers the JSON round-trip record conversion (including the deliberate
int-to-float coercion), strict and best-effort string-map conversion,
and string-map widening.
"""

from __future__ import annotations

import json
import math
import queue
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

import pytest
from pydantic import BaseModel, Field
from structlog.testing import capture_logs

from formatkit.converters import (
    coerce_any_to_string,
    map_any_to_map_string,
    map_string_to_map_any,
    to_generic_record,
)
from formatkit.errors import EncodingError, TypeMismatchError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclass
class Sample:
    name: str
    id: str


@dataclass
class Outer:
    one_point: str
    sample: Sample | None


@dataclass
class Embedded:
    field: Outer
    hello: str


class Person(BaseModel):
    first_field: str = Field(alias="firstField")
    second_field: int = Field(alias="secondField")


# ---------------------------------------------------------------------------
# Tests: to_generic_record
# ---------------------------------------------------------------------------


class TestToGenericRecord:

    def test_flat_dataclass(self) -> None:
        res = to_generic_record(Sample(name="John Doe", id="12121"))
        assert res == {"name": "John Doe", "id": "12121"}

    def test_nested_dataclass(self) -> None:
        field = Outer(one_point="yuhuhuu", sample=Sample(name="John Doe", id="12121"))
        res = to_generic_record(field)
        assert res == {"one_point": "yuhuhuu", "sample": {"name": "John Doe", "id": "12121"}}

    def test_embedded_dataclass(self) -> None:
        field = Outer(one_point="yuhuhuu", sample=Sample(name="John Doe", id="12121"))
        res = to_generic_record(Embedded(field=field, hello="WORLD!!!!"))
        assert json.loads(json.dumps(res)) == {
            "field": {"one_point": "yuhuhuu", "sample": {"name": "John Doe", "id": "12121"}},
            "hello": "WORLD!!!!",
        }

    def test_ints_become_floats(self) -> None:
        res = to_generic_record({"firstField": "A", "secondField": 1})
        assert res == {"firstField": "A", "secondField": 1.0}
        assert isinstance(res["secondField"], float)

    def test_nested_ints_become_floats(self) -> None:
        res = to_generic_record({"outer": {"counts": [1, 2]}})
        assert res["outer"]["counts"] == [1.0, 2.0]
        assert all(isinstance(v, float) for v in res["outer"]["counts"])

    def test_pydantic_model_uses_aliases(self) -> None:
        res = to_generic_record(Person(firstField="A", secondField=1))
        assert res == {"firstField": "A", "secondField": 1.0}

    def test_bools_and_nulls_kept(self) -> None:
        res = to_generic_record({"flag": True, "missing": None})
        assert res["flag"] is True
        assert res["missing"] is None

    def test_datetime_and_uuid_become_strings(self) -> None:
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        ident = UUID("12345678-1234-5678-1234-567812345678")
        res = to_generic_record({"when": when, "id": ident})
        assert res["when"].startswith("2024-01-02T03:04:05")
        assert res["id"] == "12345678-1234-5678-1234-567812345678"

    def test_none_gives_empty_record(self) -> None:
        assert to_generic_record(None) == {}

    def test_queue_not_serializable(self) -> None:
        with pytest.raises(EncodingError, match="marshal"):
            to_generic_record({"chan": queue.Queue()})

    def test_function_not_serializable(self) -> None:
        with pytest.raises(EncodingError):
            to_generic_record(lambda: None)

    def test_lock_not_serializable(self) -> None:
        with pytest.raises(EncodingError):
            to_generic_record({"lock": threading.Lock()})

    def test_nan_rejected(self) -> None:
        with pytest.raises(EncodingError, match="marshal"):
            to_generic_record({"score": math.nan})

    def test_infinity_rejected(self) -> None:
        with pytest.raises(EncodingError):
            to_generic_record({"nested": {"limit": math.inf}})
        with pytest.raises(EncodingError):
            to_generic_record({"floor": -math.inf})

    def test_top_level_list_rejected(self) -> None:
        with pytest.raises(EncodingError, match="map"):
            to_generic_record([1, 2, 3])

    def test_top_level_string_rejected(self) -> None:
        with pytest.raises(EncodingError):
            to_generic_record("just a string")


# ---------------------------------------------------------------------------
# Tests: map_any_to_map_string
# ---------------------------------------------------------------------------


class TestMapAnyToMapString:

    def test_all_strings(self) -> None:
        assert map_any_to_map_string({"a": "1", "b": "2"}) == {"a": "1", "b": "2"}

    def test_non_string_raises(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            map_any_to_map_string({"a": 1, "b": 2})
        assert exc_info.value.key == "a"
        assert exc_info.value.value == 1
        assert exc_info.value.kind == "number"

    def test_error_after_good_values(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            map_any_to_map_string({"a": "ok", "b": None})
        assert exc_info.value.key == "b"
        assert exc_info.value.kind == "null"

    def test_none_input(self) -> None:
        assert map_any_to_map_string(None) == {}

    def test_returns_new_dict(self) -> None:
        src = {"a": "1"}
        out = map_any_to_map_string(src)
        out["b"] = "2"
        assert src == {"a": "1"}


# ---------------------------------------------------------------------------
# Tests: coerce_any_to_string
# ---------------------------------------------------------------------------


class TestCoerceAnyToString:

    def test_valid_input(self) -> None:
        assert coerce_any_to_string({"a": "1"}) == {"a": "1"}

    def test_none_input(self) -> None:
        assert coerce_any_to_string(None) == {}

    def test_empty_input(self) -> None:
        assert coerce_any_to_string({}) == {}

    def test_wrong_value_type(self) -> None:
        assert coerce_any_to_string({"a": 1}) == {"a": "invalid string value: 1"}

    def test_mixed_values(self) -> None:
        out = coerce_any_to_string({"a": "x", "b": [1, 2], "c": None, "d": True})
        assert out == {
            "a": "x",
            "b": "invalid string value: [1, 2]",
            "c": "invalid string value: None",
            "d": "invalid string value: True",
        }

    def test_debug_logs_each_coercion(self) -> None:
        with capture_logs() as logs:
            coerce_any_to_string({"a": 1, "b": "ok"}, debug=True)
        events = [entry for entry in logs if entry["event"] == "non_string_value_coerced"]
        assert len(events) == 1
        assert events[0]["key"] == "a"
        assert events[0]["log_level"] == "warning"

    def test_no_logs_without_debug(self) -> None:
        with capture_logs() as logs:
            coerce_any_to_string({"a": 1}, debug=False)
        assert logs == []

    def test_debug_defaults_to_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FK_DEBUG", "true")
        with capture_logs() as logs:
            coerce_any_to_string({"a": 1})
        assert [entry["event"] for entry in logs] == ["non_string_value_coerced"]


# ---------------------------------------------------------------------------
# Tests: map_string_to_map_any
# ---------------------------------------------------------------------------


class TestMapStringToMapAny:

    def test_none_input(self) -> None:
        assert map_string_to_map_any(None) == {}

    def test_empty_input(self) -> None:
        assert map_string_to_map_any({}) == {}

    def test_valid_map(self) -> None:
        assert map_string_to_map_any({"a": "1", "b": "2"}) == {"a": "1", "b": "2"}

    def test_round_trip_with_strict_conversion(self) -> None:
        src = {"a": "1", "b": "two"}
        assert map_any_to_map_string(map_string_to_map_any(src)) == src
