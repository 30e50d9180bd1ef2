"""
Cross-system update protocol

Applies one change to the payment provider and then to the local mirror.
There is no coordinator: the provider call is never rolled back, so a local
failure after a provider success leaves the two systems diverged. That case
is logged at CRITICAL with enough context for a reconciliation job to repair
it, and reported to the caller instead of raised.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from enrollment.domain.errors import BillingProviderError
from shared.infrastructure.observability.logger import get_logger, log_divergence

logger = get_logger(__name__)

Step = Callable[[], Awaitable[Any]]


class TwoStepOutcome(str, Enum):
    COMPLETED = "completed"
    EXTERNAL_FAILED = "external_failed"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class CrossSystemResult:
    outcome: TwoStepOutcome
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is TwoStepOutcome.COMPLETED

    @property
    def provider_applied(self) -> bool:
        return self.outcome is not TwoStepOutcome.EXTERNAL_FAILED


@dataclass
class CrossSystemUpdate:
    """
    One external-then-local write.

    Attributes:
        operation: Stable operation name used in logs (``amount_update``, ``pause``, ...)
        external_subscription_id: Provider id of the subscription being changed
        intended_state: Human readable target, e.g. ``"set amount to 16000"``
        attempt_external: Provider call; raises ``BillingProviderError`` on failure
        attempt_local: Local mirror write in its own transaction
        context: Extra key/values for every log record
    """
    operation: str
    external_subscription_id: str
    intended_state: str
    attempt_external: Step
    attempt_local: Step
    context: dict[str, Any] = field(default_factory=dict)

    async def run(self) -> CrossSystemResult:
        try:
            await self.attempt_external()
        except BillingProviderError as e:
            logger.error(
                "Billing provider update failed",
                operation=self.operation,
                external_subscription_id=self.external_subscription_id,
                error=e.message,
                **self.context,
            )
            return CrossSystemResult(TwoStepOutcome.EXTERNAL_FAILED, e.message)

        try:
            await self.attempt_local()
        except Exception as e:
            # provider side already applied; nothing to roll back there
            log_divergence(
                logger,
                self.operation,
                self.external_subscription_id,
                self.intended_state,
                str(e),
                **self.context,
            )
            return CrossSystemResult(
                TwoStepOutcome.DIVERGED,
                f"Billing provider applied '{self.intended_state}' "
                f"but the local record could not be updated: {e}",
            )

        return CrossSystemResult(TwoStepOutcome.COMPLETED)
