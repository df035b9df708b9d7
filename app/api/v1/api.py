from fastapi import APIRouter
from app.api.v1.endpoints import categories, health, tasks

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])

# Resource endpoints
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
