# smart_converter/core/router.py
# Role: Orchestrator for one query. It glues together:
# classification (LLM + keyword fallback), the per-domain extractor -> calculator pipelines,
# synthesis (LLM + deterministic fallback), the step log, and bounded history.

from __future__ import annotations

import json
from typing import Callable, Dict, List, Optional, Tuple

import smart_converter.config as config
from smart_converter.core.session_context import SessionContext
from smart_converter.llm.gemini_client import GeminiClient, api_key_from_env
from smart_converter.llm.query_analyzer import QueryAnalyzer
from smart_converter.llm.response_generator import ResponseGenerator
from smart_converter.models.analysis import LogEntry, ProcessResult, QueryAnalysis, ToolCallResult
from smart_converter.models.intent import Tool
from smart_converter.models.result import ConversionResult
from smart_converter.tools.currency_client import POPULAR_PAIRS, CurrencyClient
from smart_converter.tools.datetime_helper import DateTimeHelper
from smart_converter.tools.unit_converter import UnitConverter

COULD_NOT_PARSE_ERROR = "Could not parse a conversion request from the query"
COULD_NOT_PARSE_MESSAGE = (
    "I couldn't find a conversion in your request. "
    'Try something like "Convert 5 miles to km" or "How many days until Christmas?"'
)

ToolHandler = Callable[[str], ConversionResult]


class QueryRouter:
    EXAMPLE_QUERIES = (
        "What day is 50 days from now and convert 5 miles to km?",
        "Convert 100 USD to EUR and what's 25°C in Fahrenheit?",
        "How many days until Christmas and convert 10 pounds to kg?",
        "Convert 3 PM PST to EST and 500 ml to cups",
        "What's 1000 JPY in USD and what day was 30 days ago?",
    )

    def __init__(
        self,
        context: Optional[SessionContext] = None,
        unit_converter: Optional[UnitConverter] = None,
        currency_client: Optional[CurrencyClient] = None,
        datetime_helper: Optional[DateTimeHelper] = None,
        query_analyzer: Optional[QueryAnalyzer] = None,
        response_generator: Optional[ResponseGenerator] = None,
        client: Optional[GeminiClient] = None,
    ) -> None:
        # Key line: dependencies are injectable for testing/mocking; the context owns all mutable state.
        self.context = context or SessionContext()
        self.unit_converter = unit_converter or UnitConverter()
        self.currency_client = currency_client or CurrencyClient(rate_cache=self.context.rate_cache)
        self.datetime_helper = datetime_helper or DateTimeHelper()
        self.query_analyzer = query_analyzer or QueryAnalyzer(client)
        self.response_generator = response_generator or ResponseGenerator(client)
        self._client = client

        # Fixed execution order: unit, currency, datetime.
        self._tools: Dict[Tool, Tuple[str, ToolHandler]] = {
            Tool.UNIT: ("Unit Converter", self.unit_converter.handle_conversion),
            Tool.CURRENCY: ("Currency Converter", self.currency_client.handle_conversion),
            Tool.DATETIME: ("DateTime Helper", self.datetime_helper.handle_request),
        }

    def _log(self, steps: List[LogEntry], step_type: str, content: str) -> None:
        entry = LogEntry(type=step_type, content=content)
        steps.append(entry)
        if config.DEBUG:
            print(f"[{entry.type}] {entry.content} ({entry.timestamp:%H:%M:%S})")

    def _execute_tools(
        self, query: str, analysis: QueryAnalysis, steps: List[LogEntry]
    ) -> List[Tuple[Tool, ConversionResult]]:
        # Role: every requested tool sees the original query and narrows it itself.
        executed: List[Tuple[Tool, ConversionResult]] = []
        for tool in analysis.requested_tools():
            label, handler = self._tools[tool]
            self._log(steps, "Tool Call", f"Calling {label}")
            result = handler(query)
            self._log(steps, "Tool Result", f"{label}: {json.dumps(result.to_dict(), default=str)}")
            executed.append((tool, result))
        return executed

    def process(self, query: str) -> ProcessResult:
        # 1) Classify (LLM, keyword fallback)
        # 2) Run requested tools in fixed order
        # 3) No tool recognized the query -> "could not parse" (no synthesis, no history)
        # 4) Synthesize (LLM, formatted-line fallback)
        # 5) Append to bounded history
        steps: List[LogEntry] = []
        analysis: Optional[QueryAnalysis] = None
        tool_results: List[ToolCallResult] = []

        self._log(steps, "User Query", query)

        try:
            if not query or not query.strip():
                raise ValueError("Query must be non-empty.")

            recent = self.context.recent_messages()

            self._log(steps, "Agent Thought", f'Analyzing query: "{query}"')
            outcome = self.query_analyzer.analyze(query, recent_messages=recent)
            analysis = outcome.analysis
            if outcome.used_fallback:
                self._log(steps, "Agent Thought", f"Keyword analysis: {analysis.model_dump_json()}")
            else:
                self._log(steps, "Agent Thought", f"LLM Analysis: {outcome.raw_text}")

            executed = self._execute_tools(query, analysis, steps)
            tool_results = [ToolCallResult(tool=tool, result=result.to_dict()) for tool, result in executed]

            matched = [(tool, result) for tool, result in executed if result.matched]
            if not matched:
                self._log(steps, "Error", COULD_NOT_PARSE_MESSAGE)
                return ProcessResult(
                    success=False,
                    query=query,
                    analysis=analysis,
                    tool_results=tool_results,
                    final_response=COULD_NOT_PARSE_MESSAGE,
                    error=COULD_NOT_PARSE_ERROR,
                    steps=steps,
                )

            self._log(steps, "Agent Observation", "Processing tool results and generating final response")
            generated = self.response_generator.generate(
                query,
                [{"tool": tool.value, "result": result.to_dict()} for tool, result in matched],
                recent_messages=recent,
            )
            self._log(steps, "Final Answer", generated.text)

            errors = [f"{tool.value}: {result.error}" for tool, result in matched if not result.success]
            success = any(result.success for _, result in matched)

            if success:
                self.context.add_exchange(query, generated.text)

            return ProcessResult(
                success=success,
                query=query,
                analysis=analysis,
                tool_results=tool_results,
                final_response=generated.text,
                error="; ".join(errors) if errors else None,
                steps=steps,
            )

        except Exception as e:
            # Key line: the single outermost catch; every request terminates with a value.
            message = f"I encountered an error processing your request: {e}"
            self._log(steps, "Error", message)
            return ProcessResult(
                success=False,
                query=query,
                analysis=analysis,
                tool_results=tool_results,
                final_response=message,
                error=str(e),
                steps=steps,
            )

    def get_examples(self) -> dict:
        # Role: mixed multi-tool queries first, then each tool's own single-domain examples.
        return {
            "examples": list(self.EXAMPLE_QUERIES),
            "tool_examples": {
                Tool.UNIT.value: list(getattr(self.unit_converter, "EXAMPLES", ())),
                Tool.CURRENCY.value: list(getattr(self.currency_client, "EXAMPLES", ())),
                Tool.DATETIME.value: list(getattr(self.datetime_helper, "EXAMPLES", ())),
            },
            "popular_currency_pairs": [f"{a}/{b}" for a, b in POPULAR_PAIRS],
        }

    def is_configured(self) -> bool:
        return self._client is not None or api_key_from_env() is not None

    def get_status(self) -> dict:
        configured = self.is_configured()
        return {
            "is_configured": configured,
            "has_api_key": api_key_from_env() is not None,
            "configuration_error": None if configured else "API key not configured. Set GEMINI_API_KEY in .env",
            "model_name": getattr(self._client, "model_name", None) or config.gemini_model(),
            "history_length": len(self.context.history),
            "tools_loaded": {
                "unit_converter": self.unit_converter is not None,
                "currency_converter": self.currency_client is not None,
                "datetime_helper": self.datetime_helper is not None,
            },
        }

    def clear_history(self) -> None:
        self.context.clear_history()
        if config.DEBUG:
            print("[System] Conversation history cleared")
