# Role: LLM-backed query classification into {unit, currency, datetime} needs.
# It enforces a "single JSON object" contract, repairs common violations, and falls back to a deterministic
# keyword classifier whenever the call fails or no usable JSON comes back, so analyze() always answers.

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import smart_converter.config as config
from smart_converter.llm.gemini_client import GeminiClient, LLMError
from smart_converter.models.analysis import QueryAnalysis
from smart_converter.prompts.analysis_prompt import build_analysis_prompt
from smart_converter.prompts.system_prompt import build_system_prompt
from smart_converter.utils.normalization import TIMEZONE_ALIASES

UNIT_KEYWORDS = (
    "convert", "miles", "mile", "km", "kilometer", "meters", "metres", "feet", "foot", "inch",
    "yards", "pounds", "lbs", "kg", "kilogram", "grams", "ounces", "oz",
    "celsius", "fahrenheit", "kelvin", "rankine", "°",
    "liters", "litres", "ml", "gallons", "quarts", "pints", "cups", "acres", "hectares",
)
CURRENCY_KEYWORDS = (
    "usd", "eur", "gbp", "jpy", "cad", "aud", "chf", "cny", "inr", "krw",
    "dollars", "euros", "pounds", "yen", "yuan", "rupees", "currency", "exchange rate",
)
DATETIME_KEYWORDS = (
    "days", "date", "time", "ago", "from now", "until", "timezone", "today", "tomorrow", "yesterday",
    "christmas", "halloween", "thanksgiving", "new year", "valentine",
)

# Clock times ("3 PM", "10:30am") and zone names ("PST", "Tokyo") only count as whole words.
_CLOCK_CUE = re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:am|pm)\b", re.IGNORECASE)
_ZONE_CUE = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in sorted(TIMEZONE_ALIASES, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)

# Accepted spellings per flag: the prompt's camelCase keys plus the model's own field names.
_FLAG_KEYS = {
    "needs_unit": ("needsUnitConversion", "needs_unit", "needsUnit"),
    "needs_currency": ("needsCurrencyConversion", "needs_currency", "needsCurrency"),
    "needs_datetime": ("needsDateTimeCalculation", "needs_datetime", "needsDateTime"),
}


@dataclass(frozen=True)
class AnalysisResult:
    analysis: QueryAnalysis
    raw_text: str
    used_fallback: bool


def keyword_analysis(query: str) -> QueryAnalysis:
    # Role: total classifier; may legitimately answer all-false.
    low = (query or "").lower()
    return QueryAnalysis(
        needs_unit=any(k in low for k in UNIT_KEYWORDS),
        needs_currency=any(k in low for k in CURRENCY_KEYWORDS),
        needs_datetime=(
            any(k in low for k in DATETIME_KEYWORDS)
            or _CLOCK_CUE.search(low) is not None
            or _ZONE_CUE.search(low) is not None
        ),
        reasoning="Fallback keyword-based analysis",
    )


class QueryAnalyzer:
    """
    LLM-backed tool selection.

    Contract:
    - We ask the model to return a single JSON object only.
    - In practice, models sometimes wrap JSON in code fences or add extra text.
    - Anything unusable falls back to keyword analysis.
    """

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        # Key line: lazy-init avoids crashing if GEMINI_API_KEY is missing (keyword fallback still works).
        self._client = client

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            self._client = GeminiClient()
        return self._client

    def analyze(self, query: str, recent_messages: Optional[List[Dict[str, str]]] = None) -> AnalysisResult:
        # 1) Build strict prompt
        # 2) Call LLM (failure -> keywords)
        # 3) Parse JSON (with repairs; failure -> keywords)
        # 4) Read the three flags
        prompt = build_analysis_prompt(query)

        try:
            raw = self._get_client().generate_text(
                prompt,
                history=recent_messages,
                system_prompt=build_system_prompt(),
            )
        except LLMError as e:
            if config.DEBUG:
                print("\n--- QUERY ANALYZER: LLM FAILED ---")
                print("ERROR:", e)
            return self._fallback(query, raw_text="")

        if config.DEBUG:
            print("\n--- QUERY ANALYZER ---")
            print("QUERY:", query)
            print("RAW LLM OUTPUT:\n", raw)

        parsed, parse_meta = self._try_parse_json(raw)
        if not isinstance(parsed, dict):
            return self._fallback(query, raw_text=raw)

        if parse_meta.get("repaired") and config.DEBUG:
            print(f"WARNING: QueryAnalyzer received non-strict JSON output (repaired={parse_meta}).")

        flags: Dict[str, bool] = {}
        for field, keys in _FLAG_KEYS.items():
            present = [k for k in keys if k in parsed]
            if present:
                flags[field] = self._parse_bool(parsed[present[0]])

        if not flags:
            # Key line: JSON without any of the three flags carries no decision.
            return self._fallback(query, raw_text=raw)

        reasoning = parsed.get("reasoning")
        analysis = QueryAnalysis(
            **flags,
            reasoning=reasoning.strip() if isinstance(reasoning, str) else "",
        )
        return AnalysisResult(analysis=analysis, raw_text=raw, used_fallback=False)

    def _strip_code_fences(self, text: str) -> str:
        # Role: remove markdown fences if model incorrectly wrapped JSON.
        if not text:
            return ""
        t = text.strip()

        if t.startswith("```"):
            t = re.sub(r"^\s*```(?:json)?\s*", "", t, flags=re.IGNORECASE)
            t = re.sub(r"\s*```\s*$", "", t)
        return t.strip()

    def _try_parse_json(self, text: str) -> Tuple[Optional[Any], Dict[str, Any]]:
        # 1) strict json.loads
        # 2) strip code fences
        # 3) extract {...} substring as last attempt
        raw = (text or "").strip()

        try:
            return json.loads(raw), {"repaired": False, "method": "strict"}
        except json.JSONDecodeError:
            pass

        cleaned = self._strip_code_fences(raw)
        if cleaned != raw:
            try:
                return json.loads(cleaned), {"repaired": True, "method": "stripped_fences"}
            except json.JSONDecodeError:
                pass

        start = cleaned.find("{")
        end = cleaned.rfind("}")
        if start != -1 and end != -1 and end > start:
            candidate = cleaned[start : end + 1]
            try:
                return json.loads(candidate), {"repaired": True, "method": "extracted_braces"}
            except json.JSONDecodeError:
                return None, {"repaired": True, "method": "failed"}

        return None, {"repaired": False, "method": "failed"}

    def _parse_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"true", "yes", "1"}
        if isinstance(value, (int, float)):
            return value != 0
        return False

    def _fallback(self, query: str, raw_text: str) -> AnalysisResult:
        analysis = keyword_analysis(query)

        if config.DEBUG:
            print("\n--- ANALYSIS FALLBACK TRIGGERED ---")
            print("KEYWORD ANALYSIS:", analysis.model_dump())
            print("-----------------------------------\n")

        return AnalysisResult(analysis=analysis, raw_text=raw_text or "", used_fallback=True)
