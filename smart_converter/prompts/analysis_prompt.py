# Role: Builds the classification prompt. The model must answer with ONE JSON object holding three booleans
# and a short reasoning string; QueryAnalyzer repairs common contract violations.

from __future__ import annotations


def build_analysis_prompt(query: str) -> str:
    return f"""
Analyze this user query and determine which conversion tools to use: "{query}"

Respond with a single JSON object only (no markdown, no extra text):
{{
  "needsUnitConversion": boolean,
  "needsCurrencyConversion": boolean,
  "needsDateTimeCalculation": boolean,
  "reasoning": "explanation of what tools are needed and why"
}}

Examples:
- "Convert 5 miles to km" -> {{"needsUnitConversion": true, "needsCurrencyConversion": false, "needsDateTimeCalculation": false, "reasoning": "This is a length unit conversion"}}
- "What's 100 USD in EUR" -> {{"needsUnitConversion": false, "needsCurrencyConversion": true, "needsDateTimeCalculation": false, "reasoning": "This is a currency conversion"}}
- "What day is 30 days from now and convert 5 kg to pounds" -> {{"needsUnitConversion": true, "needsCurrencyConversion": false, "needsDateTimeCalculation": true, "reasoning": "This requires both date calculation and mass unit conversion"}}
""".strip()
