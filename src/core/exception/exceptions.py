# src/core/exception/exceptions.py
from pydantic import BaseModel, Field
from typing import Any


class BaseCustomException(Exception):
    def __init__(self, status_code: int, code: str, detail: str):
        self.status_code = status_code
        self.code = code
        self.detail = detail
        super().__init__(detail)


class InvalidRequestException(BaseCustomException):
    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=400, code="VALIDATION_ERROR", detail=detail)


class ConflictException(BaseCustomException):
    def __init__(self, detail: str = "Resource already exists", code: str = "CONFLICT"):
        super().__init__(status_code=400, code=code, detail=detail)


class MalformedReferenceException(BaseCustomException):
    def __init__(self, detail: str = "Malformed resource identifier"):
        super().__init__(status_code=400, code="MALFORMED_REFERENCE", detail=detail)


class UnauthorizedException(BaseCustomException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=401, code="UNAUTHORIZED", detail=detail)


class TokenForbiddenException(BaseCustomException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, code="INVALID_TOKEN", detail=detail)


class HaveNotPermissionException(BaseCustomException):
    def __init__(self, detail: str = "You do not have permission to modify this resource"):
        super().__init__(status_code=403, code="FORBIDDEN", detail=detail)


class NotFoundException(BaseCustomException):
    def __init__(self, detail: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(status_code=404, code=code, detail=detail)


class DatabaseException(BaseCustomException):
    def __init__(self, detail: str = "Database error"):
        super().__init__(status_code=500, code="DB_ERROR", detail=detail)


class UnexpectedException(BaseCustomException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=500, code="SERVER_ERROR", detail=detail)


class GlobalErrorResponse(BaseModel):
    status_code: int = Field(..., examples=[400])
    code: str = Field(..., examples=["ERROR_CODE_STRING"])
    error: str = Field(..., examples=["Human readable error message"])
    errors: list[Any] | None = Field(None, description="Field errors for request validation failures")
