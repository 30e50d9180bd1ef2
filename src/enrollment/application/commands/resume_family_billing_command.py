"""
Resume Family Billing Command
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.application.base_command import BaseCommand
from shared.application.command_handler import CommandHandler

from enrollment.application.commands.pause_family_billing_command import FamilyBillingToggleHandler
from enrollment.application.dto import BillingToggleResult
from enrollment.domain.types import SubscriptionStatus


@dataclass(frozen=True)
class ResumeFamilyBillingCommand(BaseCommand):
    family_reference_id: UUID


class ResumeFamilyBillingCommandHandler(
    FamilyBillingToggleHandler,
    CommandHandler[ResumeFamilyBillingCommand, BillingToggleResult],
):
    """Handler for ResumeFamilyBillingCommand."""

    paused = False
    required_status = SubscriptionStatus.PAUSED
    verb = "resume"

    async def handle(self, command: ResumeFamilyBillingCommand) -> BillingToggleResult:
        return await self.toggle(command.family_reference_id)
