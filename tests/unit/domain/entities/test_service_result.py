"""Unit tests for ServiceResult and ServiceError."""

import pytest

from hospeda.domain.entities.service_result import (
    CountResult,
    ServiceError,
    ServiceErrorCode,
    ServiceResult,
)


def test_ok_result_carries_data():
    result = ServiceResult.ok({"id": "a1"})

    assert result.is_ok
    assert result.error is None
    assert result.data == {"id": "a1"}
    assert result.unwrap() == {"id": "a1"}


def test_ok_result_may_carry_none():
    """None is a legitimate success value."""
    result = ServiceResult.ok(None)

    assert result.is_ok
    assert result.unwrap() is None


def test_fail_result_carries_error():
    result = ServiceResult.fail(ServiceErrorCode.NOT_FOUND, "Tag not found")

    assert not result.is_ok
    assert result.data is None
    assert result.error.code == ServiceErrorCode.NOT_FOUND
    assert result.error.message == "Tag not found"


def test_unwrap_raises_carried_error():
    result = ServiceResult.fail(
        ServiceErrorCode.FORBIDDEN,
        "Permission denied",
        {"reason": "DENIED"},
    )

    with pytest.raises(ServiceError) as exc_info:
        result.unwrap()

    assert exc_info.value.code == ServiceErrorCode.FORBIDDEN
    assert exc_info.value.details == {"reason": "DENIED"}


def test_result_requires_data_or_error():
    """A bare constructor call is rejected."""
    with pytest.raises(ValueError):
        ServiceResult()


def test_from_error_copies_code_message_and_details():
    error = ServiceError(ServiceErrorCode.VALIDATION_ERROR, "Bad input", [{"loc": ["name"]}])

    result = ServiceResult.from_error(error)

    assert result.error.to_dict() == {
        "code": "VALIDATION_ERROR",
        "message": "Bad input",
        "details": [{"loc": ["name"]}],
    }


def test_error_dict_omits_missing_details():
    result = ServiceResult.fail(ServiceErrorCode.INTERNAL_ERROR, "An unexpected error occurred")

    assert result.error.to_dict() == {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
    }


def test_service_error_repr():
    error = ServiceError(ServiceErrorCode.NOT_FOUND, "missing")

    assert "NOT_FOUND" in repr(error)
    assert str(error) == "missing"


def test_count_result():
    assert CountResult(count=3).count == 3
