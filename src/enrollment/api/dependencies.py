"""
Dugsi API Dependencies
"""
from enrollment.bootstrap import get_withdrawal_service

__all__ = ["get_withdrawal_service"]
