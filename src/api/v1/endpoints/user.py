from fastapi import APIRouter, Depends, Query

from core.di import get_user_service, get_current_user
from core.exception.exceptions import MalformedReferenceException
from domains.user.exceptions import (
    EmptySearchQueryException,
    NoUsersFoundException,
    SelfFollowException,
    TargetUserNotFoundException,
    UserNotFoundException,
)
from domains.user.models import User
from domains.user.schemas import FollowResponse, UserProfileResponse, UserSearchResponse
from domains.user.service import UserService
from util.docs import create_error_response

router = APIRouter()


# declared before /{username} so "search" is not taken as a username
@router.get(
    "/search",
    status_code=200,
    summary="Search users by username",
    response_model=UserSearchResponse,
    responses=create_error_response(EmptySearchQueryException, NoUsersFoundException),
)
async def search_users(
    q: str | None = Query(None, description="Case-insensitive username fragment"),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.search_users(q)


@router.get(
    "/{username}",
    status_code=200,
    summary="Public profile and recipes of a user",
    response_model=UserProfileResponse,
    responses=create_error_response(UserNotFoundException),
)
async def user_profile(
    username: str,
    page: str | None = Query(None, description="1-based page number"),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.get_profile(username, page=page)


@router.post(
    "/{user_id}/follow",
    status_code=200,
    summary="Toggle following a user",
    response_model=FollowResponse,
    responses=create_error_response(
        TargetUserNotFoundException, SelfFollowException, MalformedReferenceException
    ),
)
async def toggle_follow(
    user_id: str,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return await user_service.toggle_follow(current_user, user_id)
