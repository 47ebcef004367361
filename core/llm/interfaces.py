"""
LLM Provider Interface - Abstract base for generative text backends.

Implementations wrap a concrete API (OpenAI, Ollama, any OpenAI-compatible
endpoint) behind two calls: free-text generation and schema-constrained JSON.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class LLMResponseError(ValueError):
    """The backend answered, but not with something we can use."""


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers.
    """

    @abstractmethod
    def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None
    ) -> str:
        """
        Generate free-form text (letters, resumes, research notes) for a prompt.
        """
        pass

    @abstractmethod
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
        user_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Produce JSON data adhering to a schema.

        Args:
            text: Source text or fully-built prompt
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
        """
        pass
