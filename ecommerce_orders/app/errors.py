# app/errors.py
"""
Error kinds raised by the order pipeline.

Every error carries a closed ``ErrorKind`` discriminant so the HTTP layer can
branch on ``err.kind`` instead of comparing exception identities.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


class OrderError(Exception):
    kind: ErrorKind

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "error": str(self)}


class ValidationError(OrderError):
    """Caller input violates a domain invariant. Never retried."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, reason: str, index: Optional[int] = None):
        self.field = field
        self.reason = reason
        self.index = index
        where = field if index is None else f"items[{index}].{field}"
        super().__init__(f"{where}: {reason}")

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out.update({"field": self.field, "reason": self.reason})
        if self.index is not None:
            out["index"] = self.index
        return out


class InvalidRequestError(ValidationError):
    """Raised by the service guard before the order is even constructed."""


class NotFoundError(OrderError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"order not found: {order_id}")

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["id"] = self.order_id
        return out


class PersistenceError(OrderError):
    """
    Infrastructure failure (connection loss, constraint violation, bad read).
    The storage exception is kept both on ``cause`` and as ``__cause__``.
    """

    kind = ErrorKind.PERSISTENCE

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")

    def to_dict(self) -> Dict[str, Any]:
        # storage details stay in the logs
        return {"kind": self.kind.value, "error": "internal server error"}
