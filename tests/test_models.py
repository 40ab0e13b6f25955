# tests/test_models.py
"""
Tests for message / function models and their dict coercion.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chat_tokens.models import (
    AssistantMessage,
    FunctionCallOption,
    FunctionDefinition,
    FunctionMessage,
    PromptTokenBreakdown,
    SystemMessage,
    TokenOverheads,
    UserMessage,
    parse_function,
    parse_function_call,
    parse_message,
)


class TestParseMessage:
    @pytest.mark.parametrize(
        "data,cls",
        [
            ({"role": "system", "content": "x"}, SystemMessage),
            ({"role": "user", "content": "x"}, UserMessage),
            ({"role": "assistant", "content": None}, AssistantMessage),
            ({"role": "function", "name": "f", "content": "{}"}, FunctionMessage),
        ],
    )
    def test_role_selects_variant(self, data, cls):
        assert isinstance(parse_message(data), cls)

    def test_model_passthrough(self):
        msg = SystemMessage(content="x")
        assert parse_message(msg) is msg

    def test_extra_keys_ignored(self):
        msg = parse_message({"role": "user", "content": "x", "tool_call_id": "abc"})
        assert msg.content == "x"

    def test_content_must_be_text_for_system(self):
        with pytest.raises(ValidationError):
            parse_message({"role": "system", "content": [{"type": "text", "text": "x"}]})

    def test_missing_role(self):
        with pytest.raises(ValidationError):
            parse_message({"content": "x"})

    def test_frozen(self):
        msg = UserMessage(content="x")
        with pytest.raises(ValidationError):
            msg.content = "y"  # type: ignore[misc]


class TestFunctionModels:
    def test_parameters_order_preserved(self):
        fn = parse_function(
            {"name": "f", "parameters": {"type": "object", "properties": {"z": {}, "a": {}}}}
        )
        assert list(fn.parameters["properties"]) == ["z", "a"]

    def test_default_parameters(self):
        assert FunctionDefinition(name="f").parameters == {"type": "object", "properties": {}}

    @pytest.mark.parametrize("value", [None, "none", "auto"])
    def test_simple_directives(self, value):
        assert parse_function_call(value) == value

    def test_named_directive(self):
        assert parse_function_call({"name": "foo"}) == FunctionCallOption(name="foo")


class TestTokenOverheads:
    def test_defaults(self):
        overheads = TokenOverheads()
        assert overheads.per_message == 3
        assert overheads.functions_block == 9
        assert overheads.system_with_functions == -4

    def test_unknown_constant_rejected(self):
        with pytest.raises(ValidationError):
            TokenOverheads.model_validate({"per_mesage": 4})


class TestBreakdown:
    def test_total(self):
        breakdown = PromptTokenBreakdown(
            messages=[5, 6], completion=3, functions=23, system_with_functions=-4, function_call=1
        )
        assert breakdown.total == 34
        assert breakdown.model_dump()["total"] == 34
