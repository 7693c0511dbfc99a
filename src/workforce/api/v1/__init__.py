"""
Version 1 of the HTTP API.

    app.include_router(api_router, prefix="/api/v1")
"""
from fastapi import APIRouter

from .routes import branches, employees, health

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(branches.router)
api_router.include_router(employees.router)

__all__ = ["api_router"]
