"""
API routes
"""

from fastapi import APIRouter
from .room_routes import router as room_router
from .jira_routes import router as jira_router
from .deck_routes import router as deck_router

# Main router
api_router = APIRouter()

# Register each feature's routes
api_router.include_router(room_router, prefix="/rooms", tags=["Rooms"])
api_router.include_router(jira_router, prefix="/jira", tags=["Jira"])
api_router.include_router(deck_router, prefix="/deck", tags=["Deck"])
