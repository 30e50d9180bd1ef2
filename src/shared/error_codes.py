# src/shared/error_codes.py
# Central mapping that aligns with the Error Contract.
# Keep keys stable; admin clients rely on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 400,
        "message": "Validation failed for one or more fields."
    },
    "invalid_input": {
        "http": 422,
        "message": "The request cannot be applied in the current state."
    },
    "billing_not_configured": {
        "http": 422,
        "message": "Billing provider is not configured."
    },

    # ─── Enrollment ────────────────────────────────────────────────────────
    "student_not_found": {
        "http": 404,
        "message": "Student not found."
    },
    "family_not_found": {
        "http": 404,
        "message": "Family not found."
    },
    "already_withdrawn": {
        "http": 409,
        "message": "Student is already withdrawn."
    },
    "not_withdrawn": {
        "http": 409,
        "message": "Student is not withdrawn."
    },

    # ─── Billing ───────────────────────────────────────────────────────────
    "no_active_subscription": {
        "http": 404,
        "message": "No active subscription found for this family."
    },
    "billing_provider_error": {
        "http": 502,
        "message": "Billing provider request failed."
    },

    # ─── Generic ───────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Resource not found."
    },
    "conflict": {
        "http": 409,
        "message": "Conflict."
    },
    "domain_error": {
        "http": 400,
        "message": "Request could not be processed."
    },
    "internal_error": {
        "http": 500,
        "message": "Internal server error."
    },
}
