"""
SQLAlchemy Implementation of Unit of Work
Manages database transactions with async SQLAlchemy sessions
"""
from __future__ import annotations

from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class SQLAlchemyUnitOfWork:
    """
    SQLAlchemy-based Unit of Work implementation.

    Opens a new session for every ``async with`` block so the same UoW
    instance can run several consecutive transactions (read, mutate, then
    write a mirror record after a remote call).

    Attributes:
        session: Async SQLAlchemy session of the current block
        _committed: Flag tracking if transaction was committed
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        """
        Initialize UoW with a session factory.

        Args:
            session_factory: Callable returning a new AsyncSession
        """
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of an 'async with' block")
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        """
        Enter async context manager.

        Begins a new transaction on a fresh session.

        Returns:
            Self (the UoW instance)
        """
        if self._session is not None:
            raise RuntimeError("UnitOfWork blocks cannot be nested")

        self._session = self._session_factory()
        self._committed = False
        await self._session.begin()

        logger.debug("UnitOfWork transaction started")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """
        Exit async context manager.

        Rolls back if an exception occurred or nothing was committed,
        then releases the session.
        """
        try:
            if exc_type is not None:
                await self.rollback()
                logger.debug(
                    "UnitOfWork rolled back due to exception",
                    exception=str(exc_val),
                )
            elif not self._committed:
                # read-only blocks end here
                await self.rollback()
        finally:
            await self.session.close()
            self._session = None
            self._reset_repositories()

    async def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            Exception: If commit fails
        """
        try:
            await self.session.commit()
            self._committed = True

            logger.debug("UnitOfWork transaction committed")

        except Exception as e:
            await self.rollback()
            logger.error("UnitOfWork commit failed", error=str(e))
            raise

    async def rollback(self) -> None:
        """
        Rollback the current transaction.

        Discards all changes made within this UoW context.
        """
        try:
            await self.session.rollback()
            self._committed = False

            logger.debug("UnitOfWork transaction rolled back")
        except Exception as e:
            logger.error("UnitOfWork rollback failed", error=str(e))
            raise

    def _reset_repositories(self) -> None:
        """Drop repositories bound to the closed session. Overridden by subclasses."""
