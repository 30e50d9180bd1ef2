"""Enrollment queries"""
from enrollment.application.queries.get_withdraw_family_preview_query import (
    GetWithdrawFamilyPreviewQuery,
    GetWithdrawFamilyPreviewQueryHandler,
)
from enrollment.application.queries.get_withdraw_preview_query import (
    GetWithdrawPreviewQuery,
    GetWithdrawPreviewQueryHandler,
)

__all__ = [
    "GetWithdrawFamilyPreviewQuery",
    "GetWithdrawFamilyPreviewQueryHandler",
    "GetWithdrawPreviewQuery",
    "GetWithdrawPreviewQueryHandler",
]
