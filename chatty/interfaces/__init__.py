"""Abstract interfaces for infrastructure abstraction."""

from chatty.interfaces.llm_provider import ILLMProvider
from chatty.interfaces.storage_provider import IStorageProvider

__all__ = [
    "ILLMProvider",
    "IStorageProvider",
]
