"""
Base Command Handler
Abstract base for all command handlers
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from shared.application.base_command import BaseCommand
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

TCommand = TypeVar("TCommand", bound=BaseCommand)
TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """
    Abstract base class for command handlers.

    Command handlers execute write operations and enforce business rules.
    They orchestrate domain logic and coordinate with repositories.

    Type Parameters:
        TCommand: Command type this handler processes
        TResult: Return type of the handler
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        """
        Handle the command and return result.

        Raises:
            DomainError: If a precondition is violated
        """

    async def __call__(self, command: TCommand) -> TResult:
        """
        Make handler callable directly.

        Adds logging around command execution.
        """
        command_name = command.__class__.__name__

        logger.debug("Executing command", command=command_name)

        try:
            result = await self.handle(command)
            logger.debug("Command executed successfully", command=command_name)
            return result
        except Exception as e:
            logger.warning("Command execution failed", command=command_name, error=str(e))
            raise
