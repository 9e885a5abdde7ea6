from fastapi import APIRouter

from src.app.api.v1 import auth, onboarding

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(onboarding.router)
