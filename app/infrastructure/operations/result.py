"""Operation result dataclass.

Every fallible step in the notification pipeline reports back through an
OperationResult instead of raising, so callers can decide whether to retry,
log or ignore the failure.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- short description for logs
        data: Optional[Any] -- value produced by the operation, if any
        error_code: Optional[str] -- machine readable failure code
        status_code: Optional[int] -- HTTP status observed, when one exists
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_transient(self) -> bool:
        """True if the failure may clear up on another attempt."""
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def success(
        cls,
        data: Optional[Any] = None,
        message: str = "ok",
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult.

        Args:
            data: Optional payload to include with the result
            message: Success message
            status_code: HTTP status observed, if the operation was a request

        Returns:
            OperationResult with SUCCESS status
        """
        return cls(
            status=OperationStatus.SUCCESS,
            message=message,
            data=data,
            status_code=status_code,
        )

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Error message
            error_code: Optional machine error code
            status_code: HTTP status observed, if any
            data: Optional payload to include with the error

        Returns:
            OperationResult with the given error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a retryable error result.

        Use for server errors, rate limiting, timeouts and dropped
        connections.
        """
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, status_code
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "OperationResult":
        """Create a non-retryable error result.

        Use for client errors and anything the remote side rejected
        deliberately.
        """
        return cls.error(
            OperationStatus.PERMANENT_ERROR, message, error_code, status_code
        )
