"""Error kinds raised by the moderation service and admin gate.

Each is an HTTPException so routes can let it propagate unchanged.
"""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidStateError(HTTPException):
    def __init__(self, detail: str = "No pending action found"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Pending action changed concurrently"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Unauthorized: Admin password required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class StoreFailureError(HTTPException):
    def __init__(self, detail: str = "Store operation failed"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
