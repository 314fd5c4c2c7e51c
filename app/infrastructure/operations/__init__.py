"""Operation result types and status enums.

Standardized result types for the notification pipeline, plus classifiers
that map HTTP outcomes onto them.
"""

from infrastructure.operations.classifiers import (
    classify_http_status,
    classify_transport_error,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_status",
    "classify_transport_error",
]
