"""
Write-side message contract
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseCommand:
    """
    Immutable request to change enrollment or billing state.

    Every concrete command (withdraw a child, withdraw a family, re-enroll,
    pause family billing) is handled by exactly one ``CommandHandler``.
    """
