"""Operation status enumeration.

Outcome classes shared by the delivery engine, the activity recorder and the
notification facade. Retry decisions are made on these values only.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed
        TRANSIENT_ERROR: Worth retrying (5xx, 429, timeout, connection reset)
        PERMANENT_ERROR: Retrying cannot help (4xx, malformed destination)
        NOT_FOUND: Referenced record does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
