"""Tests for result normalization and output contracts."""

from __future__ import annotations

import json
from typing import Any

import pytest

from freelo_mcp.tools.contracts import ITEMS_KEY, ContractKind, collection_of, object_of
from freelo_mcp.tools.normalize import (
    InvocationResult,
    coerce_result,
    format_response,
    normalize_result,
    text_block,
    to_tool_result,
)
from freelo_mcp.tools.schemas import Task

COLLECTION = collection_of(Task)
OBJECT = object_of(Task)


class TestCollectionNormalization:
    def test_bare_list_is_wrapped(self) -> None:
        result = normalize_result(InvocationResult(structured_content=[{"id": 1}]), COLLECTION)
        assert result.structured_content == {"items": [{"id": 1}]}

    def test_items_list_is_kept(self) -> None:
        payload = {"items": [{"id": 1}], "total": 1}
        result = normalize_result(InvocationResult(structured_content=payload), COLLECTION)
        assert result.structured_content == payload

    def test_data_list_moves_to_items(self) -> None:
        payload = {"data": [{"id": 2}], "total": 1}
        result = normalize_result(InvocationResult(structured_content=payload), COLLECTION)
        assert result.structured_content == {"items": [{"id": 2}]}

    @pytest.mark.parametrize(
        "payload", [None, {"id": 1}, {"items": "nope"}, {"data": {"tasks": []}}, "text", 42]
    )
    def test_anything_else_becomes_empty(self, payload: object) -> None:
        result = normalize_result(
            InvocationResult(content=[text_block("x")], structured_content=payload), COLLECTION
        )
        assert result.structured_content == {"items": []}

    def test_empty_list(self) -> None:
        result = normalize_result(InvocationResult(structured_content=[]), COLLECTION)
        assert result.structured_content == {"items": []}


class TestNormalizeResult:
    def test_no_contract_unchanged(self) -> None:
        original = InvocationResult(structured_content=[1, 2])
        assert normalize_result(original, None) is original

    def test_none_result_unchanged(self) -> None:
        assert normalize_result(None, COLLECTION) is None

    def test_error_result_unchanged(self) -> None:
        original = InvocationResult(content=[text_block("boom")], is_error=True)
        assert normalize_result(original, COLLECTION) is original

    def test_text_synthesized_from_structured(self) -> None:
        result = normalize_result(InvocationResult(structured_content={"id": 1}), OBJECT)
        assert result.content == [text_block(json.dumps({"id": 1}, indent=2))]

    def test_existing_text_kept(self) -> None:
        original = InvocationResult(content=[text_block("raw")], structured_content=[{"id": 1}])
        result = normalize_result(original, COLLECTION)
        assert result.content == [text_block("raw")]

    def test_object_payload_untouched(self) -> None:
        result = normalize_result(InvocationResult(structured_content={"id": 7}), OBJECT)
        assert result.structured_content == {"id": 7}

    @pytest.mark.parametrize("payload", [None, "", [1, 2], 5])
    def test_non_object_payload_becomes_empty_object(self, payload: Any) -> None:
        original = format_response(payload)
        result = normalize_result(original, OBJECT)
        assert result.structured_content == {}
        assert result.content == original.content
        assert to_tool_result(result).structured_content == {}

    def test_input_not_mutated(self) -> None:
        payload = [{"id": 1}]
        original = InvocationResult(structured_content=payload)
        normalize_result(original, COLLECTION)
        assert original.structured_content is payload
        assert original.content == []

    @pytest.mark.parametrize(
        "payload", [[{"id": 1}], {"data": [1]}, {"items": [1]}, None, {"x": 1}]
    )
    def test_idempotent(self, payload: object) -> None:
        once = normalize_result(InvocationResult(structured_content=payload), COLLECTION)
        twice = normalize_result(once, COLLECTION)
        assert twice == once


class TestCoerceResult:
    def test_invocation_result_passthrough(self) -> None:
        original = InvocationResult(structured_content={"a": 1})
        assert coerce_result(original) is original

    def test_legacy_envelope(self) -> None:
        raw = {
            "content": [{"type": "text", "text": "hi"}],
            "structuredContent": {"a": 1},
            "isError": False,
        }
        result = coerce_result(raw)
        assert result.content == [{"type": "text", "text": "hi"}]
        assert result.structured_content == {"a": 1}
        assert result.is_error is False

    def test_legacy_error_envelope(self) -> None:
        result = coerce_result({"content": [{"type": "text", "text": "bad"}], "isError": True})
        assert result.is_error is True
        assert result.text == "bad"

    def test_bare_payload(self) -> None:
        result = coerce_result([{"id": 1}])
        assert result.content == []
        assert result.structured_content == [{"id": 1}]

    def test_dict_with_content_key_is_payload(self) -> None:
        raw = {"content": "note body", "id": 3}
        assert coerce_result(raw).structured_content == raw


class TestFormatResponse:
    def test_compact_json_text(self) -> None:
        result = format_response({"id": 1, "name": "Úkol"})
        assert result.content == [text_block('{"id": 1, "name": "Úkol"}')]
        assert result.structured_content == {"id": 1, "name": "Úkol"}
        assert result.is_error is False


class TestToolResult:
    def test_dict_structured_content_passed(self) -> None:
        tool_result = to_tool_result(
            InvocationResult(content=[text_block("t")], structured_content={"items": []})
        )
        assert tool_result.structured_content == {"items": []}
        assert tool_result.content[0].text == "t"

    def test_non_dict_structured_content_dropped(self) -> None:
        tool_result = to_tool_result(
            InvocationResult(content=[text_block("[1]")], structured_content=[1])
        )
        assert tool_result.structured_content is None
        assert tool_result.content[0].text == "[1]"


class TestOutputContract:
    def test_collection_schema(self) -> None:
        schema = COLLECTION.json_schema()
        assert schema["type"] == "object"
        assert schema["required"] == [ITEMS_KEY]
        assert schema["properties"][ITEMS_KEY]["type"] == "array"
        assert "id" in schema["properties"][ITEMS_KEY]["items"]["properties"]

    def test_object_schema(self) -> None:
        schema = OBJECT.json_schema()
        assert schema["type"] == "object"
        assert "name" in schema["properties"]
        assert schema.get("additionalProperties") is True

    def test_untyped_collection(self) -> None:
        contract = collection_of()
        assert contract.kind is ContractKind.COLLECTION
        assert contract.json_schema()["properties"][ITEMS_KEY] == {"type": "array", "items": {}}

    def test_dict_element_schema(self) -> None:
        element = {"type": "object", "properties": {"id": {"type": "integer"}}}
        schema = collection_of(element).json_schema()
        assert schema["properties"][ITEMS_KEY]["items"] == element
