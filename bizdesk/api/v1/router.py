"""API v1 router aggregation."""

from fastapi import APIRouter

from bizdesk.api.v1.endpoints import auth, clients, health, jobs, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
