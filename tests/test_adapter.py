import logging
from typing import Any

import pytest

from gpt_agent_lib import Action
from gpt_agent_lib.llm_impl.openai_api.adapter import ToolCallAccumulator, decode_arguments, get_actions


class TestDecodeArguments:
    """Tests for tolerant decoding of tool call arguments."""

    def test_valid_object(self):
        assert decode_arguments("search", '{"query": "x", "limit": 3}') == {"query": "x", "limit": 3}

    @pytest.mark.parametrize("payload", [None, ""])
    def test_missing_payload(self, payload):
        assert decode_arguments("search", payload) == {}

    def test_malformed_payload_is_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="gpt_agent_lib"):
            assert decode_arguments("search", '{"query": ') == {}
        assert "'search'" in caplog.text
        assert '{"query": ' in caplog.text

    def test_non_object_payload(self):
        assert decode_arguments("search", '"just a string"') == {}


def test_get_actions_skips_non_function_calls(make_completion: Any) -> None:
    response = make_completion(
        finish_reason="tool_calls", tool_calls=[("search", '{"query": "a"}'), ("custom", "raw text")]
    )
    response.choices[0].message.tool_calls[1].type = "custom"

    assert get_actions(response) == [Action(name="search", arguments={"query": "a"}, call_id="call_0")]


def test_get_actions_without_choices(make_completion: Any) -> None:
    assert get_actions(make_completion(empty=True)) == []


def test_accumulator_merges_by_index(make_tool_delta: Any) -> None:
    accumulator = ToolCallAccumulator()
    assert not accumulator

    accumulator.add([make_tool_delta(1, name="second", arguments='{"b":', call_id="id_2")])
    accumulator.add([make_tool_delta(0, name="first", arguments="{}", call_id="id_1")])
    accumulator.add([make_tool_delta(1, arguments=" 2}")])

    assert accumulator
    assert accumulator.to_actions() == [
        Action(name="first", arguments={}, call_id="id_1"),
        Action(name="second", arguments={"b": 2}, call_id="id_2"),
    ]
