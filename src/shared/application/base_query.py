"""
Read-side message contract
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseQuery:
    """Immutable read request; its ``QueryHandler`` never writes."""
