"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from stridelog.api.v1.routes import accounts, activities

api_router = APIRouter()

api_router.include_router(accounts.router, prefix="/accounts", tags=["Accounts"])
api_router.include_router(activities.router, tags=["Activities"])
