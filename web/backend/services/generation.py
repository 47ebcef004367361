#!/usr/bin/env python3
"""
Wrappers around the LLM provider that translate backend failures into
GenerationException for the API layer.
"""

import logging
from typing import Any, Dict, Optional

import openai

from core.llm import LLMProvider, LLMResponseError
from ..exceptions import GenerationException

logger = logging.getLogger(__name__)


def generate_json(
    ai: LLMProvider,
    prompt: str,
    schema_spec: Dict[str, Any],
    system_prompt: Optional[str] = None,
    what: str = "content"
) -> Dict[str, Any]:
    """Run a schema-constrained generation.

    Raises:
        GenerationException: the backend failed or returned unusable JSON.
    """
    try:
        return ai.extract_structured_data(prompt, schema_spec, system_prompt=system_prompt)
    except (LLMResponseError, openai.OpenAIError) as e:
        logger.error(f"Failed to generate {what}: {e}", exc_info=True)
        raise GenerationException(f"Failed to generate {what}: {e}")


def generate_text(
    ai: LLMProvider,
    prompt: str,
    system_prompt: Optional[str] = None,
    what: str = "content"
) -> str:
    try:
        return ai.generate_text(prompt, system_prompt=system_prompt)
    except (LLMResponseError, openai.OpenAIError) as e:
        logger.error(f"Failed to generate {what}: {e}", exc_info=True)
        raise GenerationException(f"Failed to generate {what}: {e}")
