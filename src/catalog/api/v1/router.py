from fastapi import APIRouter

from src.catalog.api.v1 import projects, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(users.router)
