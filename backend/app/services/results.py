"""
Round result computation
"""

import math
import re
from typing import List, Optional, Iterable

from app.core.utils import round_half_up
from app.models.participant import Participant
from app.models.vote import Vote
from app.schemas.room_schemas import RoomResults, VoteResult

# Valid cards that carry no numeric weight
NON_NUMERIC_CARDS = ("pass", "infinity")

# plain decimals only, e.g. "5", "0.5", "-1"
NUMERIC_VOTE = re.compile(r"-?\d+(\.\d+)?", re.ASCII)


def parse_numeric_vote(value: str) -> Optional[float]:
    """Numeric value of a card, or None for pass/infinity/anything unparsable"""
    if value in NON_NUMERIC_CARDS or not NUMERIC_VOTE.fullmatch(value):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def consensus_level(distinct_values: int) -> str:
    """Consensus label from the number of distinct numeric estimates"""
    if distinct_values > 3:
        return "Low"
    if distinct_values > 1:
        return "Medium"
    return "High"


def counted_votes(participants: Iterable[Participant], votes: Iterable[Vote]) -> List[Vote]:
    """Votes of active non-moderators that are not withdrawn"""
    voters = {p.id: p for p in participants if p.is_active and not p.is_moderator}
    return [v for v in votes if v.participant_id in voters and v.value != ""]


def compute_results(participants: List[Participant], votes: List[Vote]) -> RoomResults:
    """
    Aggregate one round.

    Moderators and empty votes never count. pass/infinity count as
    participants but stay out of the average and the consensus.
    """
    names = {p.id: p.name for p in participants}
    counted = counted_votes(participants, votes)

    vote_results = [
        VoteResult(
            participant_id=vote.participant_id,
            participant_name=names.get(vote.participant_id) or "Unknown",
            value=vote.value
        )
        for vote in counted
    ]

    numeric = [n for n in (parse_numeric_vote(v.value) for v in counted) if n is not None]
    average = sum(numeric) / len(numeric) if numeric else 0

    return RoomResults(
        average=round_half_up(average, 1),
        participants=len(vote_results),
        consensus=consensus_level(len(set(numeric))),
        votes=vote_results
    )
