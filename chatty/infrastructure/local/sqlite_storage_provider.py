"""
SQLite implementation of the storage provider.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from chatty.core.exceptions import InfrastructureError
from chatty.infrastructure.local.database import StorageEntryORM, get_session_factory
from chatty.interfaces.storage_provider import IStorageProvider


class SqliteStorageProvider(IStorageProvider):
    """SQLite key/value storage."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def read(self, key: str) -> Optional[str]:
        """Read a key."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(StorageEntryORM.value).where(StorageEntryORM.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to read {key}: {e}")

    async def write(self, key: str, value: str) -> None:
        """Create or replace a key."""
        try:
            async with self._session_factory() as session:
                orm = await session.get(StorageEntryORM, key)
                if orm:
                    orm.value = value
                    orm.updated_at = datetime.utcnow()
                else:
                    session.add(StorageEntryORM(key=key, value=value))
                await session.commit()
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to write {key}: {e}")

    async def delete(self, key: str) -> bool:
        """Delete a key."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(StorageEntryORM).where(StorageEntryORM.key == key)
                )
                await session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to delete {key}: {e}")

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        return await self.read(key) is not None
