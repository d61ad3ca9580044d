"""
Local file system storage provider.
"""

import re
from pathlib import Path
from typing import Optional

from chatty.core.exceptions import InfrastructureError
from chatty.interfaces.storage_provider import IStorageProvider

_SAFE_KEY = re.compile(r"[^A-Za-z0-9._-]")


class LocalStorageProvider(IStorageProvider):
    """
    Local file system storage implementation.

    Stores each key as a UTF-8 JSON file under the base directory.
    """

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize local storage provider.

        Args:
            base_path: Base directory for file storage (default: ./storage)
        """
        self.base_path = Path(base_path or "./storage")
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def read(self, key: str) -> Optional[str]:
        """Read a key from local storage."""
        file_path = self._resolve_path(key)
        try:
            if not file_path.exists():
                return None
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise InfrastructureError(f"Failed to read {key}: {e}")

    async def write(self, key: str, value: str) -> None:
        """Write a key to local storage (replace via temp file)."""
        file_path = self._resolve_path(key)
        tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8", newline="") as f:
                f.write(value)
            tmp_path.replace(file_path)
        except OSError as e:
            raise InfrastructureError(f"Failed to write {key}: {e}")

    async def delete(self, key: str) -> bool:
        """Delete a key from local storage."""
        file_path = self._resolve_path(key)
        try:
            if not file_path.exists():
                return False
            file_path.unlink()
            return True
        except OSError as e:
            raise InfrastructureError(f"Failed to delete {key}: {e}")

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        return self._resolve_path(key).exists()

    def _resolve_path(self, key: str) -> Path:
        """Map a storage key to a file inside base_path."""
        if not key:
            raise InfrastructureError("Storage key must not be empty")
        return self.base_path / f"{_SAFE_KEY.sub('_', key)}.json"
