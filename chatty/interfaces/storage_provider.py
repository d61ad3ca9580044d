"""
Storage provider interface.

Key/value persistence for serialized client state (the conversation list).
Implementations: local files, SQLite
"""

from abc import ABC, abstractmethod
from typing import Optional


class IStorageProvider(ABC):
    """Abstract interface for key/value storage."""

    @abstractmethod
    async def read(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored text, or None when the key is absent

        Raises:
            InfrastructureError: If the storage medium is unavailable
        """
        pass

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        """
        Replace the value stored under a key.

        Args:
            key: Storage key
            value: Text to store

        Raises:
            InfrastructureError: If the storage medium is unavailable
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key.

        Args:
            key: Storage key

        Returns:
            True if deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a key exists.

        Args:
            key: Storage key

        Returns:
            True if the key exists
        """
        pass
