"""LLM Module - LLM services and interfaces."""
from core.llm.interfaces import LLMProvider, LLMResponseError
from core.llm.openai_service import OpenAIService

__all__ = ['LLMProvider', 'LLMResponseError', 'OpenAIService']
