# Role: Produces the final assistant text. Calls the LLM with the query + tool results, cleans common
# "assistant preamble" artifacts, and falls back to the tools' own formatted lines when the LLM is unavailable.

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import smart_converter.config as config
from smart_converter.llm.gemini_client import GeminiClient, LLMError
from smart_converter.prompts.response_prompt import build_response_prompt
from smart_converter.prompts.system_prompt import build_system_prompt

NO_RESULTS_MESSAGE = (
    "I'm sorry, I couldn't process your conversion request. Please check your query format and try again."
)


@dataclass(frozen=True)
class GeneratedResponse:
    text: str
    used_fallback: bool


def fallback_response(tool_results: List[Dict[str, Any]]) -> str:
    # Role: deterministic answer built from successful tool results only.
    successes = [tr for tr in tool_results if (tr.get("result") or {}).get("success")]
    if not successes:
        return NO_RESULTS_MESSAGE

    lines = []
    for tr in successes:
        result = tr["result"]
        if result.get("formatted"):
            lines.append(result["formatted"])
        else:
            tool = str(tr.get("tool", ""))
            lines.append(f"{tool.capitalize()} result: {json.dumps(result, default=str)}")
    return "\n\n".join(lines)


class ResponseGenerator:
    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self._client = client

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            self._client = GeminiClient()
        return self._client

    def _clean_llm_output(self, text: str) -> str:
        # Role: remove common filler/preambles without changing actual content.
        if not text:
            return text

        lines = [ln.rstrip() for ln in text.strip().splitlines()]

        always_drop_prefixes = (
            "based on the tool results",
            "based on the results",
            "according to the tool",
            "the user",
            "i will",
            "i'll",
        )

        soft_drop_prefixes = ("okay", "ok", "sure", "alright", "got it")

        cleaned: list[str] = []
        skipping = True

        for ln in lines:
            low_norm = ln.strip().lower().rstrip(":,.-! ")

            if skipping:
                if not low_norm:
                    continue

                if any(low_norm.startswith(p) for p in always_drop_prefixes) and len(low_norm) <= 40:
                    continue

                if any(low_norm.startswith(p) for p in soft_drop_prefixes) and len(low_norm) <= 40:
                    continue

            skipping = False
            cleaned.append(ln)

        out = "\n".join(cleaned).strip()
        return out if out else text.strip()

    def generate(
        self,
        query: str,
        tool_results: List[Dict[str, Any]],
        recent_messages: Optional[List[Dict[str, str]]] = None,
    ) -> GeneratedResponse:
        # 1) Build prompts -> call LLM
        # 2) Clean output (preambles)
        # 3) On LLM failure -> deterministic formatter over successful results
        user_prompt = build_response_prompt(query, tool_results)

        if config.DEBUG:
            print("\n--- RESPONSE GENERATOR ---")
            print("QUERY:", query)
            print("TOOL RESULTS:", tool_results)
            if recent_messages:
                print("RECENT:", recent_messages)
            print("-------------------------")

        try:
            response = self._get_client().generate_text(
                user_prompt,
                history=recent_messages,
                system_prompt=build_system_prompt(),
            )
        except LLMError as e:
            out = fallback_response(tool_results)
            if config.DEBUG:
                print("LLM FAILED:", e)
                print("FALLBACK RESPONSE:\n", out)
                print("-------------------------\n")
            return GeneratedResponse(text=out, used_fallback=True)

        response = self._clean_llm_output(response or "")

        if config.DEBUG:
            print("CLEANED RESPONSE:\n", response)
            print("-------------------------\n")

        return GeneratedResponse(text=response, used_fallback=False)
