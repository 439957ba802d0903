"""Service results and errors.

Every public service method returns a ``ServiceResult``: either ``data`` or
``error`` is populated, never both. Inside the service layer failures are
raised as ``ServiceError`` and translated at the service boundary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ServiceErrorCode(str, Enum):
    """Closed set of error codes surfaced by services."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


class ServiceError(Exception):
    """Expected, typed failure raised inside the service layer.

    Args:
        code: Error code.
        message: Human-readable message, safe to show to the caller.
        details: Optional structured details (e.g. validation errors).
    """

    def __init__(
        self,
        code: ServiceErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def __repr__(self) -> str:
        return f"<ServiceError(code={self.code.value}, message={self.message!r})>"


@dataclass(frozen=True)
class ServiceErrorDetail:
    """Error payload carried by a failed ServiceResult."""

    code: ServiceErrorCode
    message: str
    details: Any | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Discriminated result of a service call.

    Use ``ServiceResult.ok`` and ``ServiceResult.fail`` rather than the
    constructor. ``data`` may legitimately be ``None`` on success (e.g. a
    lookup helper), so success is tracked by the absence of ``error``.
    """

    data: T | None = None
    error: ServiceErrorDetail | None = None
    _has_data: bool = field(default=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.error is not None and self._has_data:
            raise ValueError("ServiceResult cannot carry both data and error")
        if self.error is None and not self._has_data:
            raise ValueError("ServiceResult must carry either data or error")

    @classmethod
    def ok(cls, data: T) -> "ServiceResult[T]":
        return cls(data=data, _has_data=True)

    @classmethod
    def fail(
        cls,
        code: ServiceErrorCode,
        message: str,
        details: Any | None = None,
    ) -> "ServiceResult[T]":
        return cls(error=ServiceErrorDetail(code=code, message=message, details=details))

    @classmethod
    def from_error(cls, error: ServiceError) -> "ServiceResult[T]":
        return cls.fail(error.code, error.message, error.details)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the data or raise the carried error.

        Raises:
            ServiceError: If the result is a failure.
        """
        if self.error is not None:
            raise ServiceError(self.error.code, self.error.message, self.error.details)
        return self.data  # type: ignore[return-value]


@dataclass(frozen=True)
class CountResult:
    """Number of rows affected (or matched) by an operation."""

    count: int
