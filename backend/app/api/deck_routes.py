"""
Card deck API route
"""

from fastapi import APIRouter
from app.core.config import settings
from app.schemas.room_schemas import CARD_VALUES, SPECIAL_CARDS, DeckResponse

router = APIRouter()

@router.get("", response_model=DeckResponse)
async def get_deck():
    """Cards offered to voters and how often clients should poll"""
    return DeckResponse(
        values=CARD_VALUES,
        special=SPECIAL_CARDS,
        poll_interval_ms=settings.POLL_INTERVAL_MS
    )
