"""
Base service class for the stat tracker bot.

Provides async database session management for services and stores that
read from the database.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession


class BaseService:
    """Base class for all database-backed services with async session management."""

    def __init__(self, session_factory):
        """
        Initialize base service with session factory.

        Args:
            session_factory: Async session factory from Database class
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a read scope for async database operations."""
        session = self.session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
