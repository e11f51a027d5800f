"""
Error types raised by the service layer.

Each one is an HTTPException with its status code fixed, so services can
raise them directly and the app-level handler renders them as
{"message": ...}.
"""

from fastapi import HTTPException, status


class LedgerError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, headers: dict | None = None):
        super().__init__(status_code=self.status_code, detail=message, headers=headers)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(LedgerError):
    """Malformed or semantically invalid input."""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(LedgerError):
    """Duplicate username or email at registration."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(LedgerError):
    """Bad credentials, or a missing/invalid/expired token."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(LedgerError):
    """Row is absent, or belongs to another owner. Callers cannot tell which."""
    status_code = status.HTTP_404_NOT_FOUND
