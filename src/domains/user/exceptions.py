from core.exception.exceptions import (
    BaseCustomException,
    ConflictException,
    InvalidRequestException,
    NotFoundException,
    UnauthorizedException,
)


class DuplicateEmailException(ConflictException):
    def __init__(self, detail: str = "Email already in use"):
        super().__init__(detail=detail, code="EMAIL_CONFLICT")


class DuplicateUsernameException(ConflictException):
    def __init__(self, detail: str = "Username already taken"):
        super().__init__(detail=detail, code="USERNAME_CONFLICT")


class InvalidCredentialsException(BaseCustomException):
    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(status_code=400, code="INVALID_CREDENTIALS", detail=detail)


class UserNotFoundException(NotFoundException):
    def __init__(self, detail: str = "User not found"):
        super().__init__(detail=detail, code="USER_NOT_FOUND")


class TargetUserNotFoundException(NotFoundException):
    def __init__(self, detail: str = "Target user not found"):
        super().__init__(detail=detail, code="USER_NOT_FOUND")


class NoUsersFoundException(NotFoundException):
    def __init__(self, detail: str = "No users found"):
        super().__init__(detail=detail, code="USER_NOT_FOUND")


class EmptySearchQueryException(InvalidRequestException):
    def __init__(self, detail: str = "Search query cannot be empty"):
        super().__init__(detail=detail)


class SelfFollowException(InvalidRequestException):
    def __init__(self, detail: str = "You cannot follow yourself"):
        super().__init__(detail=detail)


class UnknownTokenSubjectException(UnauthorizedException):
    def __init__(self, detail: str = "Token subject no longer exists"):
        super().__init__(detail=detail)
