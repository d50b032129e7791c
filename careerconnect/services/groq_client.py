"""
Groq API Client

Groq serves an OpenAI-compatible API, so we use the openai library
pointed at the Groq base URL.

Models:
- groq_model (llama-3.3-70b-versatile): analysis, grading, roleplay
- groq_fast_model (llama-3.1-8b-instant): low-latency voice coaching
- groq_vision_model: webcam proctoring frames

Model output is free text; callers that need structure go through
extract_json(), which tolerates markdown fences and chatter around the JSON.
"""
import json
import logging
import re
from typing import List, Optional, Union

from openai import OpenAI, OpenAIError
from careerconnect.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


class LLMNotConfiguredError(RuntimeError):
    """Raised when a completion is requested without GROQ_API_KEY."""


class LLMResponseError(ValueError):
    """Raised when model output cannot be turned into the expected JSON."""


# Everything an AI route treats as "the model call failed"
LLM_ERRORS = (OpenAIError, LLMNotConfiguredError, LLMResponseError)


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers anywhere in the response."""
    return text.replace("```json", "").replace("```", "").strip()


def extract_json(text: str, expect: str = "object") -> Union[dict, list]:
    """
    Extract JSON from a model response.

    Tries a direct parse of the fence-stripped text first, then falls back
    to the outermost {...} (expect="object") or [...] (expect="array").
    """
    cleaned = strip_code_fences(text or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    pattern = _ARRAY_RE if expect == "array" else _OBJECT_RE
    match = pattern.search(cleaned)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            pass
    raise LLMResponseError(f"Failed to parse AI response: {cleaned[:200]}")


class GroqClient:
    """
    Thin wrapper around the chat completions endpoint.
    """

    def __init__(self, api_key: str = None, base_url: str = None):
        self.api_key = settings.groq_api_key if api_key is None else api_key
        self.base_url = base_url or settings.groq_base_url
        self.model = settings.groq_model
        self.fast_model = settings.groq_fast_model
        self.vision_model = settings.groq_vision_model
        self._client: Optional[OpenAI] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> OpenAI:
        if not self.is_configured:
            raise LLMNotConfiguredError("GROQ_API_KEY is not configured")
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    def complete(self, messages: List[dict], model: str = None, json_mode: bool = False) -> str:
        """
        Run one chat completion and return the message text ("" when empty).
        """
        kwargs = {
            "model": model or self.model,
            "messages": messages,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(**kwargs)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def prompt(self, prompt: str, model: str = None, json_mode: bool = False) -> str:
        """Single user-message completion."""
        return self.complete([{"role": "user", "content": prompt}], model=model, json_mode=json_mode)

    def test_connection(self) -> bool:
        """Test if the Groq API is reachable"""
        try:
            response = self.complete(
                [
                    {"role": "system", "content": "You are a test assistant."},
                    {"role": "user", "content": "Reply with exactly: OK"}
                ],
                model=self.fast_model
            )
            return "OK" in response.upper()
        except Exception as e:
            logger.warning("Groq connection failed: %s", e)
            return False


# Singleton instance
_groq_client: GroqClient = None


def get_groq_client() -> GroqClient:
    """Get or create Groq client (singleton pattern). Also used as a FastAPI dependency."""
    global _groq_client
    if _groq_client is None:
        _groq_client = GroqClient()
    return _groq_client
