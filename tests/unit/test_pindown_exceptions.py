"""Tests for domain exceptions (error_code, error_type, details)."""

from pindown.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConcurrencyConflictException,
    DocumentStoreException,
    PinDownException,
    ResourceNotFoundException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base PinDownException uses class name as error_code when not provided."""
    exc = PinDownException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "PinDownException"
    assert exc.error_type == "server"
    assert exc.details == {}


def test_to_dict_omits_empty_details() -> None:
    body = PinDownException("Oops", error_code="CUSTOM").to_dict()
    assert body == {"code": "CUSTOM", "type": "server", "message": "Oops"}


def test_authentication_required_and_invalid() -> None:
    required = AuthenticationException.required()
    assert required.error_code == "AUTH_REQUIRED"
    assert required.error_type == "authentication"
    assert required.message == "Valid ID token or API key required"
    assert AuthenticationException.invalid().error_code == "AUTH_INVALID"


def test_authorization_message_and_details() -> None:
    exc = AuthorizationException("pin", "write")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: write on pin"
    assert exc.details == {"resource": "pin", "action": "write"}


def test_validation_carries_field() -> None:
    exc = ValidationException("bad", field="data")
    assert exc.error_code == "VALIDATION_FAILED"
    assert exc.details == {"field": "data"}


def test_not_found_details() -> None:
    exc = ResourceNotFoundException("pinboard", "pb-1")
    assert exc.error_type == "not_found"
    assert exc.message == "Pinboard not found"
    assert exc.details == {"resource_type": "pinboard", "resource_id": "pb-1"}


def test_conflict_reports_attempts() -> None:
    exc = ConcurrencyConflictException("pinboard", "pb-1", 5)
    assert exc.error_type == "conflict"
    assert exc.error_code == "CONCURRENT_MODIFICATION"
    assert exc.details["attempts"] == 5


def test_store_error_keeps_reason_out_of_message() -> None:
    exc = DocumentStoreException("get", "pins/p1", "HTTP 503")
    assert exc.message == "Document store operation failed"
    assert "503" not in exc.message
    assert exc.details["reason"] == "HTTP 503"
