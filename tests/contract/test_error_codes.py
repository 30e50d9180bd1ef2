import inspect

from enrollment.domain import errors
from shared.error_codes import ERROR_CODES
from shared.exceptions import DomainError


def _domain_error_classes():
    return [
        obj for _, obj in inspect.getmembers(errors, inspect.isclass)
        if issubclass(obj, DomainError)
    ]


def test_every_domain_error_code_is_documented():
    for cls in _domain_error_classes():
        assert cls.code in ERROR_CODES, f"{cls.__name__} uses undocumented code {cls.code!r}"


def test_http_status_matches_error_contract():
    for cls in _domain_error_classes():
        assert ERROR_CODES[cls.code]["http"] == cls.status_code, cls.__name__


def test_client_facing_codes_are_stable():
    assert {
        "student_not_found",
        "family_not_found",
        "already_withdrawn",
        "not_withdrawn",
        "no_active_subscription",
        "billing_not_configured",
        "invalid_input",
        "validation_error",
    } <= set(ERROR_CODES)
