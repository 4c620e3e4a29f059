# Role: Builds the synthesis prompt. Injects the original query plus every tool result as JSON,
# and asks for a short direct answer so tool numbers reach the user unchanged.

from __future__ import annotations

import json
from typing import Any, Dict, List


def _format_tool_results(tool_results: List[Dict[str, Any]]) -> str:
    blocks = []
    for tr in tool_results:
        tool = str(tr.get("tool", "")).upper()
        payload = json.dumps(tr.get("result", {}), ensure_ascii=False, indent=2, default=str)
        blocks.append(f"{tool} TOOL: {payload}")
    return "\n\n".join(blocks) if blocks else "(no tool results)"


def build_response_prompt(query: str, tool_results: List[Dict[str, Any]]) -> str:
    return f"""
User Query: "{query}"

Tool Results:
{_format_tool_results(tool_results)}

Provide a direct, concise answer to the user's question.

Requirements:
- Give the final conversion result immediately.
- Be conversational but brief.
- Don't explain your process or reasoning.
- Don't say "Based on the tool results" or similar phrases.
- If a tool reports an error, say briefly what could not be computed.

Examples:
- For "Convert 5 miles to km": "5 miles equals 8.047 kilometers."
- For "What day is 30 days from now": "30 days from now will be Wednesday, October 29, 2025."
- For "100 USD to EUR": "100 USD equals approximately 85.23 EUR."

Your response:
""".strip()
