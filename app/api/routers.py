from fastapi import APIRouter

from app.api.v1.analyze import router as analyze_router
from app.api.v1.auth import router as auth_router
from app.api.v1.github import router as github_router
from app.api.v1.resume import router as resume_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(resume_router)
api_router.include_router(analyze_router)
api_router.include_router(github_router)
api_router.include_router(auth_router)
