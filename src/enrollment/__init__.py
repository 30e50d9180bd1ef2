"""
Enrollment bounded context
Withdrawal, re-enrollment and family billing reconciliation for the Dugsi program
"""
