
from dataclasses import dataclass, field, replace
from typing import Any

from ... constants import OperationStatuses, TERMINAL_OPERATION_STATUSES
from ... constants import CLIENT_ERROR_TYPE

############################################################################

# Result of a node operation as reported by GET /<operation>/<id>

@dataclass(frozen=True)
class OperationResult:
    status: str = OperationStatuses.PENDING
    data: Any = field(default_factory=dict)

    @classmethod
    def from_response(cls, body):
        if not isinstance(body, dict):
            body = {}
        return cls(
            status = body.get("status", OperationStatuses.PENDING),
            data = body.get("data") or {},
        )

    @property
    def terminal(self):
        return self.status in TERMINAL_OPERATION_STATUSES

    @property
    def failed(self):
        return self.status == OperationStatuses.FAILED

    def with_error(self, message, error_type=CLIENT_ERROR_TYPE):
        """Copy of this result with data replaced by an error descriptor"""
        return replace(
            self,
            data = {
                "errorType": error_type,
                "errorMessage": message,
            },
        )

############################################################################

def operation_status(result, operation_id):
    """
    Caller-facing status record for an operation.  Error details are
    included only when the result data carries an error descriptor.
    """

    status = {
        "operation_id": operation_id,
        "status": result.status,
    }

    data = result.data if isinstance(result.data, dict) else {}

    if data.get("errorType"):
        status["error_type"] = data["errorType"]
        status["error_message"] = data.get("errorMessage")

    return status

