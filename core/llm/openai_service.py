"""
OpenAI Service - LLM implementation using the OpenAI API.

Provides text generation and JSON-schema constrained generation for the
resume, cover letter and interview preparation features.
"""
from typing import Dict, Any, Optional, Tuple
import json
import logging
import copy
import re

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.interfaces import LLMProvider, LLMResponseError
from core.llm.system_prompts import DEFAULT_SYSTEM_PROMPT, JSON_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse a reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Longest wait declared by retry-after / x-ratelimit-reset-* headers, 0.0 if none."""
    try:
        headers = exc.response.headers
    except AttributeError:
        return 0.0

    candidates: list[float] = []
    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            candidates.append(float(retry_after))
        except ValueError:
            pass

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, ""))
        if parsed > 0:
            candidates.append(parsed)

    return max(candidates) if candidates else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, 120)

    # Fallback: exponential backoff 2 -> 4 -> 8 ... capped at 60s
    exp = wait_exponential(multiplier=1, min=2, max=60)
    return exp(retry_state)


def _llm_retry(**kwargs):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(5),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


def _unwrap_schema_spec(spec: Dict[str, Any]) -> Tuple[str, bool, Dict[str, Any]]:
    """Unwrap a schema spec to extract name, strict flag, and raw JSON schema.

    Args:
        spec: Either a wrapped spec {'name': str, 'strict': bool, 'schema': {...}}
              or a raw JSON schema dict

    Returns:
        Tuple of (name, strict, raw_schema)
    """
    if isinstance(spec, dict) and "schema" in spec and "name" in spec:
        return spec.get("name", "generation_response"), bool(spec.get("strict", False)), spec["schema"]
    return "generation_response", False, spec


def _strip_code_fences(content: str) -> str:
    """Some OpenAI-compatible servers wrap JSON in ```json fences despite response_format."""
    stripped = content.strip()
    if stripped.startswith("```"):
        stripped = re.sub(r"^```(?:json)?\s*", "", stripped)
        stripped = re.sub(r"\s*```$", "", stripped)
    return stripped


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Free-text generation for letters and resumes, JSON Schema mode for
    anything the API persists as structured data.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None
    ):
        client_kwargs = {}
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url
        if timeout:
            client_kwargs['timeout'] = timeout

        self.client = OpenAI(**client_kwargs)

        self.model_config = model_config or {}
        self.model = self.model_config.get('model', 'gpt-4o-mini')
        self.temperature = self.model_config.get('temperature', 0.7)
        self.analysis_temperature = self.model_config.get('analysis_temperature', 0.0)
        self.max_tokens = self.model_config.get('max_tokens')

    def _completion_kwargs(self, temperature: float) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"model": self.model, "temperature": temperature}
        if self.max_tokens:
            kwargs["max_tokens"] = self.max_tokens
        return kwargs

    @_llm_retry()
    def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        response = self.client.chat.completions.create(
            messages=messages,
            **self._completion_kwargs(self.temperature if temperature is None else temperature),
        )

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError) as e:
            logger.error(f"Malformed completion response: {e}")
            raise LLMResponseError("Malformed completion response") from e

        if not content or not content.strip():
            raise LLMResponseError("Empty completion from model")

        logger.debug(f"Generated {len(content)} characters with {self.model}")
        return content.strip()

    @_llm_retry()
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
        user_message: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> Dict[str, Any]:
        """Generate structured data using JSON Schema mode.

        Args:
            text: Source text, or the full prompt when user_message is None
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
            system_prompt: Optional custom system prompt. If None, uses default.
            user_message: Optional custom user message. If None, `text` is sent as-is.
        """
        name, strict, raw_schema = _unwrap_schema_spec(schema_spec)
        runtime_schema = copy.deepcopy(raw_schema)

        if runtime_schema.get("type") != "object" or "properties" not in runtime_schema:
            raise ValueError(f"Not a valid JSON Schema object. Top-level keys: {list(runtime_schema.keys())}")

        messages = [
            {"role": "system", "content": system_prompt or JSON_SYSTEM_PROMPT},
            {"role": "user", "content": user_message if user_message is not None else text},
        ]

        response = self.client.chat.completions.create(
            messages=messages,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": name,
                    "schema": runtime_schema,
                    "strict": strict,
                },
            },
            **self._completion_kwargs(self.analysis_temperature if temperature is None else temperature),
        )

        try:
            content = response.choices[0].message.content
            data = json.loads(_strip_code_fences(content))
        except (json.JSONDecodeError, IndexError, AttributeError, TypeError) as e:
            logger.error(f"Failed to parse structured response for {name}: {e}")
            raise LLMResponseError(f"Model returned invalid JSON for {name}") from e

        if not isinstance(data, dict):
            raise LLMResponseError(f"Expected a JSON object for {name}, got {type(data).__name__}")

        logger.info(f"Structured generation '{name}' returned keys: {sorted(data.keys())}")
        return data
