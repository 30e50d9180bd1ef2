"""Enrollment commands"""
from enrollment.application.commands.pause_family_billing_command import (
    PauseFamilyBillingCommand,
    PauseFamilyBillingCommandHandler,
)
from enrollment.application.commands.re_enroll_child_command import (
    ReEnrollChildCommand,
    ReEnrollChildCommandHandler,
)
from enrollment.application.commands.resume_family_billing_command import (
    ResumeFamilyBillingCommand,
    ResumeFamilyBillingCommandHandler,
)
from enrollment.application.commands.withdraw_child_command import (
    WithdrawChildCommand,
    WithdrawChildCommandHandler,
)
from enrollment.application.commands.withdraw_family_command import (
    WithdrawAllChildrenCommand,
    WithdrawAllChildrenCommandHandler,
    WithdrawFamilyCommand,
    WithdrawFamilyCommandHandler,
)

__all__ = [
    "PauseFamilyBillingCommand",
    "PauseFamilyBillingCommandHandler",
    "ReEnrollChildCommand",
    "ReEnrollChildCommandHandler",
    "ResumeFamilyBillingCommand",
    "ResumeFamilyBillingCommandHandler",
    "WithdrawAllChildrenCommand",
    "WithdrawAllChildrenCommandHandler",
    "WithdrawChildCommand",
    "WithdrawChildCommandHandler",
    "WithdrawFamilyCommand",
    "WithdrawFamilyCommandHandler",
]
