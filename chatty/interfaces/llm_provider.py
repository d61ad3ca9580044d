"""
LLM provider interface.

Defines the contract for LLM (Large Language Model) access.
Implementations: Gemini API
"""

from abc import ABC, abstractmethod
from typing import Any


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    def get_model(self) -> str:
        """
        Get the default model identifier.

        Returns:
            Model identifier (e.g., "gemini-1.5-pro-latest")
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass

    @abstractmethod
    def get_client(self) -> Any:
        """
        Get the SDK client used to issue requests.

        Returns:
            Client exposing ``aio.models.generate_content``
        """
        pass

    @abstractmethod
    def supports_vision(self) -> bool:
        """
        Check if the model accepts file/image parts.

        Returns:
            True if inline files are supported
        """
        pass

    def with_model(self, model_id: str) -> "ILLMProvider":
        """
        Create a new provider instance using a different model.

        Default implementation returns self (no override).
        """
        return self
