# Role: Minimal wrapper around Gemini API. Centralizes model name, generation settings, and error handling,
# so the rest of the code calls a single method: generate_text(prompt, history, system_prompt).

from __future__ import annotations

import os
from enum import Enum
from typing import Dict, List, Optional

from google import genai

import smart_converter.config as config

_PLACEHOLDER_KEYS = {"", "your_gemini_api_key_here"}


class LLMErrorCategory(str, Enum):
    UNAVAILABLE = "unavailable"
    RATE_LIMITED = "rate_limited"
    BAD_CREDENTIALS = "bad_credentials"
    BAD_REQUEST = "bad_request"
    NOT_CONFIGURED = "not_configured"
    EMPTY_RESPONSE = "empty_response"
    GENERIC = "generic"


_STATUS_CATEGORIES = {
    503: (LLMErrorCategory.UNAVAILABLE, "The Gemini API service is temporarily unavailable. Please try again in a few minutes."),
    429: (LLMErrorCategory.RATE_LIMITED, "Rate limit exceeded. Please wait before making more requests."),
    401: (LLMErrorCategory.BAD_CREDENTIALS, "Invalid API key. Please check your configuration."),
    400: (LLMErrorCategory.BAD_REQUEST, "Bad request. Please check your query format."),
}


class LLMError(RuntimeError):
    def __init__(
        self,
        message: str,
        category: LLMErrorCategory = LLMErrorCategory.GENERIC,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status = status


def categorize_error(error: Exception) -> LLMError:
    # Key line: google-genai API errors expose the HTTP status as `.code`.
    status = getattr(error, "code", None)
    if not isinstance(status, int):
        status = None

    if status in _STATUS_CATEGORIES:
        category, hint = _STATUS_CATEGORIES[status]
        return LLMError(f"LLM API error: {status} - {hint}", category, status)

    if status is not None:
        return LLMError(f"LLM API error: {status} - {error}", LLMErrorCategory.GENERIC, status)

    return LLMError(f"Gemini API call failed: {error}", LLMErrorCategory.GENERIC)


def api_key_from_env() -> Optional[str]:
    key = (os.getenv("GEMINI_API_KEY") or "").strip()
    return None if key in _PLACEHOLDER_KEYS else key


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.1,
        max_output_tokens: int = 1024,
    ) -> None:
        # Key lines:
        # - Reads secrets from env (no secrets in code).
        # - Low temperature keeps classification JSON stable.
        self.api_key = api_key or api_key_from_env()
        if not self.api_key:
            raise LLMError(
                "API key not configured. Set GEMINI_API_KEY in environment or .env",
                LLMErrorCategory.NOT_CONFIGURED,
            )

        self.model_name = model or config.gemini_model()
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

        self.client = genai.Client(api_key=self.api_key)

    def _build_contents(self, prompt: str, history: Optional[List[Dict[str, str]]]) -> List[dict]:
        contents = [
            {"role": m["role"], "parts": [{"text": m["content"]}]}
            for m in (history or [])
            if m.get("content")
        ]
        contents.append({"role": "user", "parts": [{"text": prompt}]})
        return contents

    def generate_text(
        self,
        prompt: str,
        history: Optional[List[Dict[str, str]]] = None,
        system_prompt: Optional[str] = None,
    ) -> str:
        # 1) Validate prompt
        # 2) Call Gemini with history as prior turns
        # 3) Validate non-empty response
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must be non-empty.")

        generation_config = {
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        if system_prompt:
            generation_config["system_instruction"] = system_prompt

        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=self._build_contents(prompt, history),
                config=generation_config,
            )
        except Exception as e:
            raise categorize_error(e) from e

        text = getattr(resp, "text", None)
        if not text:
            raise LLMError("Invalid response format from LLM API", LLMErrorCategory.EMPTY_RESPONSE)

        return text.strip()
