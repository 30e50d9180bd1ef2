"""
Base Query Handler
Abstract base for all query handlers
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from shared.application.base_query import BaseQuery

TQuery = TypeVar("TQuery", bound=BaseQuery)
TResult = TypeVar("TResult")


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """
    Abstract base class for query handlers.

    Query handlers execute read operations without modifying state.
    """

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Handle the query and return result."""

    async def __call__(self, query: TQuery) -> TResult:
        return await self.handle(query)
