"""
FastAPI dependencies for caller identity, the ledger, and operation results.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Path, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from collateral.config import get_settings
from collateral.database import async_session_maker
from collateral.kernel.errors import ErrorCode, OperationResult
from collateral.kernel.host import build_clock
from collateral.kernel.identity.jwt import verify_access_token
from collateral.kernel.ledger import CollateralLedger


# Security scheme
security = HTTPBearer(auto_error=False)

# Path parameters share the kernel's identifier bounds
EntityIdPath = Annotated[str, Path(min_length=1, max_length=64)]
DocumentIdPath = Annotated[str, Path(min_length=1, max_length=64)]
UserPath = Annotated[str, Path(min_length=1, max_length=128)]


@lru_cache
def get_ledger() -> CollateralLedger:
    """
    Process-wide ledger; its keyed locks must be shared by every request.

    The locks live in this process only, so the service must run as a single
    worker (`uvicorn --workers 1`).
    """
    settings = get_settings()
    return CollateralLedger(async_session_maker, build_clock(settings.clock_mode))


Ledger = Annotated[CollateralLedger, Depends(get_ledger)]


async def get_current_caller(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> str:
    """Caller principal from the bearer token, or raise 401."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload.sub


CurrentCaller = Annotated[str, Depends(get_current_caller)]


ERROR_STATUS = {
    ErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NO_ACCESS: status.HTTP_403_FORBIDDEN,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DOCUMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ENTITY_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.DOCUMENT_ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_PERMISSION_LEVEL: status.HTTP_400_BAD_REQUEST,
}


class OperationRejected(Exception):
    """Carries a failed OperationResult to the app's exception handler."""

    def __init__(self, code: ErrorCode):
        super().__init__(code.label)
        self.code = code
        self.status_code = ERROR_STATUS[code]


def ensure_ok(result: OperationResult) -> OperationResult:
    """Return a successful result or raise OperationRejected."""
    if not result.ok:
        raise OperationRejected(result.error)
    return result

