"""Main v1 router aggregator"""
from fastapi import APIRouter

from app.api.v1 import expenses, groups, users

# Create v1 router
api_router = APIRouter()

# Include all v1 routers
api_router.include_router(users.router)
api_router.include_router(groups.router)
api_router.include_router(expenses.router)
