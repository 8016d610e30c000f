from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from ..scoring.bowling import PERFECT_GAME, FrameKind, ScoredFrame, current_score


def game_stats(scored: Sequence[ScoredFrame]) -> Dict[str, float]:
    """Mark counts and pin totals for one resolved game.

    Frames are counted by their own kind, so the tenth frame's bonus balls
    never add extra strikes or spares.
    """
    kinds = Counter(frame.kind for frame in scored)
    first_balls = [frame.rolls[0] for frame in scored if frame.rolls]
    return {
        "strikes": kinds[FrameKind.STRIKE],
        "spares": kinds[FrameKind.SPARE],
        "opens": kinds[FrameKind.OPEN],
        "pins": sum(sum(frame.rolls) for frame in scored),
        "firstBallAverage": (
            round(sum(first_balls) / len(first_balls), 2) if first_balls else 0.0
        ),
        "score": current_score(scored),
    }


def series_stats(final_scores: Sequence[int]) -> Dict[str, float]:
    """Aggregate final scores across games (average rounded to a whole pin)."""
    games = len(final_scores)
    if not games:
        return {
            "games": 0,
            "total": 0,
            "average": 0,
            "highScore": 0,
            "lowScore": 0,
            "perfectGames": 0,
            "under100": 0,
        }
    total = sum(final_scores)
    return {
        "games": games,
        "total": total,
        "average": round(total / games),
        "highScore": max(final_scores),
        "lowScore": min(final_scores),
        "perfectGames": sum(1 for s in final_scores if s == PERFECT_GAME),
        "under100": sum(1 for s in final_scores if s < 100),
    }
