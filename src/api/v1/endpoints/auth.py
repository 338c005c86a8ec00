from fastapi import APIRouter, Depends

from core.di import get_user_service, get_current_user
from core.exception.exceptions import TokenForbiddenException, UnauthorizedException
from domains.user.exceptions import (
    DuplicateEmailException,
    DuplicateUsernameException,
    InvalidCredentialsException,
)
from domains.user.models import User
from domains.user.schemas import (
    LogInRequest,
    LogInResponse,
    MeResponse,
    RegisterRequest,
    RegisterResponse,
)
from domains.user.service import UserService
from util.docs import create_error_response

router = APIRouter()


@router.post(
    "/register",
    status_code=201,
    summary="Register a new user",
    response_model=RegisterResponse,
    responses=create_error_response(DuplicateEmailException, DuplicateUsernameException),
)
async def register(request: RegisterRequest, user_service: UserService = Depends(get_user_service)):
    return await user_service.register(request)


@router.post(
    "/login",
    status_code=200,
    summary="Log in with email and password",
    response_model=LogInResponse,
    responses=create_error_response(InvalidCredentialsException),
)
async def log_in(request: LogInRequest, user_service: UserService = Depends(get_user_service)):
    return await user_service.log_in(request)


@router.get(
    "/me",
    status_code=200,
    summary="Current user's private profile",
    response_model=MeResponse,
    responses=create_error_response(UnauthorizedException, TokenForbiddenException),
)
async def me(
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_me(current_user)
