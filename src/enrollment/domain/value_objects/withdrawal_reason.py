# src/enrollment/domain/value_objects/withdrawal_reason.py
"""Withdrawal reason codes and the label stored on the closed enrollment record."""

from __future__ import annotations

from enum import Enum

from enrollment.domain.errors import InvalidInputError

MAX_REASON_NOTE_LENGTH = 500


class WithdrawalReason(str, Enum):
    FAMILY_MOVED = "family_moved"
    FINANCIAL = "financial"
    BEHAVIORAL = "behavioral"
    SEASONAL_BREAK = "seasonal_break"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    WithdrawalReason.FAMILY_MOVED: "Family moved",
    WithdrawalReason.FINANCIAL: "Financial reasons",
    WithdrawalReason.BEHAVIORAL: "Behavioral",
    WithdrawalReason.SEASONAL_BREAK: "Seasonal break",
    WithdrawalReason.OTHER: "Other",
}


def build_reason_label(reason: WithdrawalReason, note: str | None = None) -> str:
    """``"Family moved: Relocated to Ohio"`` or just ``"Family moved"``."""
    note = note.strip() if note else None
    if note and len(note) > MAX_REASON_NOTE_LENGTH:
        raise InvalidInputError(
            f"Reason note must be at most {MAX_REASON_NOTE_LENGTH} characters",
            details={"length": len(note)},
        )
    return f"{reason.label}: {note}" if note else reason.label
