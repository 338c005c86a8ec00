# api/v1/api.py

from fastapi import APIRouter
from api.v1.endpoints import auth, recipe, user

api_router = APIRouter()

api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(recipe.router, prefix="/recipes", tags=["recipes"])
api_router.include_router(user.router, prefix="/user", tags=["users"])
