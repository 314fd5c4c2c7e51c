"""Infrastructure modules for the webhook notifier.

Centralized infrastructure components:
- configuration: Settings management (Settings, WebhookDeliverySettings)
- logging: structlog setup, request context and redaction processors
- operations: Operation results and HTTP error classification
- services: Dependency injection providers and FastAPI type aliases
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
