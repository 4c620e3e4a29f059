from __future__ import annotations

from datetime import datetime

import pytest

from smart_converter.core.router import COULD_NOT_PARSE_ERROR, QueryRouter
from smart_converter.core.session_context import SessionContext
from smart_converter.llm.gemini_client import LLMError, LLMErrorCategory
from smart_converter.llm.response_generator import NO_RESULTS_MESSAGE
from smart_converter.models.intent import Tool
from smart_converter.tools.currency_client import CurrencyClient
from smart_converter.tools.datetime_helper import DateTimeHelper

ALL_TOOLS = '{"needsUnitConversion": true, "needsCurrencyConversion": true, "needsDateTimeCalculation": true}'


@pytest.fixture
def build_router(make_llm, make_rate_source):
    def _build(llm=None, rate_source=None, max_history_exchanges=5, **overrides):
        context = SessionContext(max_history_exchanges=max_history_exchanges)
        source = rate_source or make_rate_source(error="offline")
        return QueryRouter(
            context=context,
            currency_client=CurrencyClient(rate_source=source, rate_cache=context.rate_cache),
            datetime_helper=DateTimeHelper(clock=lambda: datetime(2026, 10, 19)),
            client=llm or make_llm(error=LLMError("down", LLMErrorCategory.UNAVAILABLE)),
            **overrides,
        )

    return _build


def test_unit_query_with_llm_down(build_router):
    router = build_router()

    result = router.process("Convert 5 miles to km")

    assert result.success
    assert result.final_response == "5 mi = 8.046720 km"
    assert [tr.tool for tr in result.tool_results] == [Tool.UNIT]
    assert result.tool_results[0].result["result"] == pytest.approx(8.04672)
    assert result.analysis.reasoning == "Fallback keyword-based analysis"
    assert [s.type for s in result.steps] == [
        "User Query",
        "Agent Thought",
        "Agent Thought",
        "Tool Call",
        "Tool Result",
        "Agent Observation",
        "Final Answer",
    ]
    assert len(router.context.history) == 2


def test_garbage_query_calls_no_calculator(build_router, make_llm, make_rate_source):
    llm = make_llm([ALL_TOOLS])
    source = make_rate_source(error="offline")
    router = build_router(llm=llm, rate_source=source)

    result = router.process("asdf 12345")

    assert not result.success
    assert result.error == COULD_NOT_PARSE_ERROR
    assert all(not tr.result["success"] for tr in result.tool_results)
    assert source.calls == []
    # Key line: no synthesis call after the classification call.
    assert len(llm.calls) == 1
    assert router.context.history == []
    assert result.steps[-1].type == "Error"


def test_garbage_query_with_keyword_fallback_runs_no_tools(build_router):
    result = build_router().process("asdf 12345")
    assert not result.success
    assert result.tool_results == []
    assert result.error == COULD_NOT_PARSE_ERROR


def test_mixed_query_runs_tools_in_fixed_order(build_router):
    result = build_router().process("What day is 50 days from now and convert 5 miles to km?")

    assert result.success
    assert [tr.tool for tr in result.tool_results] == [Tool.UNIT, Tool.DATETIME]
    assert result.final_response == (
        "5 mi = 8.046720 km\n\n50 days from now will be Tuesday, December 08, 2026"
    )


def test_currency_uses_fallback_rate_when_source_is_down(build_router):
    result = build_router().process("50 dollars to pounds")

    assert result.success
    assert result.error is None
    currency = [tr for tr in result.tool_results if tr.tool == Tool.CURRENCY][0]
    assert currency.result["source"] == "fallback"
    assert result.final_response == "50 USD = 36.50 GBP"


def test_days_until_christmas(build_router):
    result = build_router().process("How many days until Christmas?")
    assert result.success
    datetime_result = result.tool_results[0].result
    assert datetime_result["difference"] == 67
    assert datetime_result["is_in_future"] is True


def test_calculator_error_surfaces_in_error_field(build_router):
    router = build_router()
    result = router.process("Convert 5 miles to kg")

    assert not result.success
    assert result.final_response == NO_RESULTS_MESSAGE
    assert result.error == "unit: Cannot convert from mi to kg. Units may be incompatible or not supported."
    assert router.context.history == []


def test_llm_path_uses_analysis_and_synthesis(build_router, make_llm):
    analysis = '{"needsUnitConversion": true, "needsCurrencyConversion": false, "needsDateTimeCalculation": false}'
    llm = make_llm([analysis, "5 miles equals 8.047 kilometers.", analysis, "That is 16.093 kilometers."])
    router = build_router(llm=llm)

    first = router.process("Convert 5 miles to km")
    second = router.process("Convert 10 miles to km")

    assert first.final_response == "5 miles equals 8.047 kilometers."
    assert second.final_response == "That is 16.093 kilometers."
    assert llm.calls[0]["history"] == []
    assert llm.calls[2]["history"] == [
        {"role": "user", "content": "Convert 5 miles to km"},
        {"role": "model", "content": "5 miles equals 8.047 kilometers."},
    ]


def test_history_is_bounded(build_router):
    router = build_router(max_history_exchanges=2)
    for miles in (1, 2, 3):
        router.process(f"Convert {miles} miles to km")

    assert len(router.context.history) == 4
    assert router.context.history[0].content == "Convert 2 miles to km"


class _ExplodingUnitConverter:
    def handle_conversion(self, query):
        raise RuntimeError("boom")


def test_unexpected_error_is_caught_once(build_router):
    router = build_router(unit_converter=_ExplodingUnitConverter())

    result = router.process("Convert 5 miles to km")

    assert not result.success
    assert result.error == "boom"
    assert result.final_response == "I encountered an error processing your request: boom"
    assert result.analysis is not None
    assert result.steps[-1].type == "Error"


def test_empty_query(build_router):
    result = build_router().process("   ")
    assert not result.success
    assert result.error == "Query must be non-empty."


def test_status_and_clear_history(build_router):
    router = build_router()
    router.process("Convert 5 miles to km")

    status = router.get_status()
    assert status["is_configured"] is True
    assert status["model_name"] == "fake-model"
    assert status["history_length"] == 2
    assert all(status["tools_loaded"].values())

    router.clear_history()
    assert router.get_status()["history_length"] == 0


def test_status_without_client_or_key():
    status = QueryRouter().get_status()
    assert status["is_configured"] is False
    assert status["has_api_key"] is False
    assert status["configuration_error"]


def test_example_queries_cover_all_tools():
    assert len(QueryRouter.EXAMPLE_QUERIES) == 5


def test_timezone_query_routes_without_llm(build_router):
    result = build_router().process("Convert 3 PM PST to EST")

    assert result.success
    assert [tr.tool for tr in result.tool_results] == [Tool.UNIT, Tool.DATETIME]
    timezone_result = result.tool_results[-1].result
    assert timezone_result["from_timezone"] == "America/Los_Angeles"
    assert timezone_result["to_formatted"].startswith("10/19/2026, 18:00:00")


def test_mixed_timezone_and_unit_query_keeps_both_halves(build_router):
    result = build_router().process(QueryRouter.EXAMPLE_QUERIES[3])

    assert result.success
    assert [tr.tool for tr in result.tool_results] == [Tool.UNIT, Tool.DATETIME]
    assert all(tr.result["success"] for tr in result.tool_results)
    assert result.final_response.startswith("500 ml = 2.113379 cup\n\n")
    assert "18:00:00" in result.final_response


def test_get_examples_lists_tool_examples_and_popular_pairs(build_router):
    examples = build_router().get_examples()

    assert examples["examples"] == list(QueryRouter.EXAMPLE_QUERIES)
    assert set(examples["tool_examples"]) == {"unit", "currency", "datetime"}
    assert "USD/EUR" in examples["popular_currency_pairs"]


def test_every_tool_example_is_recognized_by_its_tool(build_router):
    router = build_router()
    handlers = {
        "unit": router.unit_converter.handle_conversion,
        "currency": router.currency_client.handle_conversion,
        "datetime": router.datetime_helper.handle_request,
    }

    for tool, examples in router.get_examples()["tool_examples"].items():
        for example in examples:
            assert handlers[tool](example).matched, example
