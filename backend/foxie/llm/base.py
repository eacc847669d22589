"""
LLM Provider Base - Abstract base for text-completion providers.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


class LLMProviderError(Exception):
    """Completion call failed: timeout, non-2xx status or malformed payload."""


@dataclass
class LLMMessage:
    """A single role/content entry sent to the completion API."""
    role: str  # "system", "user", "assistant"
    content: str

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        """Create a text message."""
        return LLMMessage(role=role, content=text)


@dataclass
class LLMResponse:
    """Response from an LLM API call."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract base class for LLM API providers.
    Providers raise LLMProviderError for every failed call.
    """

    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None,
                 default_temperature: float = 0.7, default_max_tokens: int = 150):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: Ordered conversation, system preamble first
            temperature: Sampling temperature override
            max_tokens: Max tokens override
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse with the generated content

        Raises:
            LLMProviderError: If the call fails or the payload is malformed
        """
        pass

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, Any]]:
        """Convert LLMMessage list to API-compatible format."""
        return [{"role": m.role, "content": m.content} for m in messages]
