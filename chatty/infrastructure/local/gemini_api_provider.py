"""
Gemini API provider.

Uses Gemini API with API Key (no GCP project required).
"""

from typing import Optional

from google import genai

from chatty.core.config import Settings, get_settings
from chatty.interfaces.llm_provider import ILLMProvider


class GeminiAPIProvider(ILLMProvider):
    """Gemini API provider using API Key."""

    def __init__(
        self,
        model_name: str,
        settings: Optional[Settings] = None,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize Gemini API provider.

        Args:
            model_name: Gemini model name (e.g., "gemini-1.5-pro-latest")
            settings: Settings override (defaults to cached settings)
            client: Shared client (created lazily when omitted)
        """
        self._model_name = model_name
        self._settings = settings or get_settings()
        self._client = client

        if not self._settings.GOOGLE_API_KEY:
            raise ValueError(
                "GOOGLE_API_KEY is required for Gemini API provider. "
                "Get your API key from https://aistudio.google.com/apikey"
            )

    def get_model(self) -> str:
        """Get Gemini model name."""
        return self._model_name

    def get_model_name(self) -> str:
        """Get human-readable model name."""
        return f"Gemini API ({self._model_name})"

    def get_client(self) -> genai.Client:
        """Get (or lazily create) the GenAI client."""
        if self._client is None:
            self._client = genai.Client(api_key=self._settings.GOOGLE_API_KEY)
        return self._client

    def supports_vision(self) -> bool:
        """Gemini models accept inline files."""
        return True

    def with_model(self, model_id: str) -> "GeminiAPIProvider":
        """Create a provider for a different model sharing the same client."""
        if model_id == self._model_name:
            return self
        return GeminiAPIProvider(
            model_name=model_id,
            settings=self._settings,
            client=self.get_client(),
        )
