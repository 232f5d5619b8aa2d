"""
Operation outcomes: the closed error taxonomy and the result value every
public registry operation returns.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel


class ErrorCode(IntEnum):
    """Stable error codes for registry operations."""
    NOT_AUTHORIZED = 200
    ENTITY_ALREADY_EXISTS = 201
    ENTITY_NOT_FOUND = 202
    DOCUMENT_ALREADY_REGISTERED = 203
    DOCUMENT_NOT_FOUND = 204
    INVALID_PERMISSION_LEVEL = 205
    NO_ACCESS = 206

    @property
    def label(self) -> str:
        """CamelCase name used in API error bodies, e.g. ``NotAuthorized``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class OperationError(Exception):
    """Raised by precondition checks; converted to a failed result by the ledger."""

    def __init__(self, code: ErrorCode):
        super().__init__(code.label)
        self.code = code


class OperationResult(BaseModel):
    """
    Outcome of a registry operation.

    Either `ok` with the audit `log_id` written (None for entity
    registration), or not `ok` with exactly one `error`.
    """

    ok: bool
    error: Optional[ErrorCode] = None
    log_id: Optional[int] = None

    @classmethod
    def success(cls, log_id: Optional[int] = None) -> "OperationResult":
        return cls(ok=True, log_id=log_id)

    @classmethod
    def failure(cls, code: ErrorCode) -> "OperationResult":
        return cls(ok=False, error=code)
