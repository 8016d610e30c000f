# backend/bowlscore/routers/bowling.py
from __future__ import annotations

import logging
from typing import Any, Sequence

from fastapi import APIRouter, Request

from ..exceptions import GameComplete, InvalidGame, InvalidRoll, http_problem
from ..rate_limit import limiter, scoring_rate_limit
from ..schemas import (
    FrameOut,
    FrameRow,
    GameIn,
    GameOut,
    GameStatsOut,
    MaxScoreIn,
    MaxScoreOut,
    ReconstructIn,
    ReconstructOut,
    RollIn,
    RollValidateIn,
    RollValidateOut,
    SeriesStatsOut,
    StatsIn,
    StatsOut,
)
from ..scoring import bowling
from ..services import (
    ValidationError,
    game_stats,
    merge_reconstruction,
    reconstruct_frames,
    series_stats,
    validate_frame_rolls,
    validate_score_totals,
)

logger = logging.getLogger(__name__)

# Resource-only prefix
router = APIRouter(prefix="/bowling", tags=["bowling"])


def _checked_frames(frames: Sequence[Any]) -> list[list[int]]:
    try:
        return validate_frame_rolls(frames)
    except ValidationError as exc:
        raise InvalidGame(exc.detail)


def _game_out(frames: Sequence[Sequence[int]]) -> GameOut:
    scored = bowling.resolve_frames(frames)
    return GameOut(
        frames=[
            FrameOut(
                index=f.index,
                rolls=list(f.rolls),
                kind=f.kind,
                marks=bowling.frame_marks(f),
                frameScore=f.frame_score,
                cumulativeScore=f.cumulative_score,
            )
            for f in scored
        ],
        rows=[FrameRow(**row) for row in bowling.serialize_frames(scored)],
        total=bowling.current_score(scored),
        maxPossible=bowling.max_possible_score(frames),
        firstIncompleteFrame=bowling.first_incomplete_frame(frames),
        complete=bowling.is_complete(frames),
    )


# POST /api/v0/bowling/resolve
@router.post("/resolve", response_model=GameOut)
@limiter.limit(scoring_rate_limit)
async def resolve_game(request: Request, body: GameIn) -> GameOut:
    return _game_out(_checked_frames(body.frames))


@router.post("/rolls/validate", response_model=RollValidateOut)
@limiter.limit(scoring_rate_limit)
async def validate_roll(request: Request, body: RollValidateIn) -> RollValidateOut:
    valid = bowling.validate_roll(
        body.value, body.frameIndex, body.rollPosition, body.frameRolls
    )
    return RollValidateOut(valid=valid)


@router.post("/rolls", response_model=GameOut)
@limiter.limit(scoring_rate_limit)
async def record_roll(request: Request, body: RollIn) -> GameOut:
    frames = _checked_frames(body.frames)
    if body.frameIndex is None and bowling.is_complete(frames):
        raise GameComplete()
    result = bowling.record_roll(frames, body.value, body.frameIndex, body.rollPosition)
    if not result.accepted:
        raise InvalidRoll(result.reason or "roll rejected")
    return _game_out([list(f.rolls) for f in result.frames])


@router.post("/max-score", response_model=MaxScoreOut)
@limiter.limit(scoring_rate_limit)
async def max_score(request: Request, body: MaxScoreIn) -> MaxScoreOut:
    frames = _checked_frames(body.frames)
    start = bowling.projection_start(frames, body.firstIncompleteFrame)
    return MaxScoreOut(
        maxPossible=bowling.max_possible_score(frames, start),
        firstIncompleteFrame=start,
    )


@router.post("/reconstruct", response_model=ReconstructOut)
@limiter.limit(scoring_rate_limit)
async def reconstruct(request: Request, body: ReconstructIn) -> ReconstructOut:
    try:
        totals = validate_score_totals(body.totals)
    except ValidationError as exc:
        raise InvalidGame(exc.detail)

    unknown = sorted(i for i in body.edited if not 0 <= i < bowling.FRAMES)
    if unknown:
        raise http_problem(
            status_code=422,
            detail="edited frames out of range: " + ", ".join(str(i) for i in unknown),
            code="reconstruct_invalid_edit",
        )

    reconstruction = reconstruct_frames(totals)
    try:
        merged_frames = merge_reconstruction(reconstruction, body.edited)
    except ValueError as exc:
        raise InvalidGame(str(exc))
    merged = [list(f.rolls) for f in merged_frames]
    guessed = [
        flag and index not in body.edited
        for index, flag in enumerate(reconstruction.guessed)
    ]
    logger.debug(
        "reconstructed %d guessed frames (confidence %.2f)",
        sum(guessed),
        reconstruction.confidence,
    )
    return ReconstructOut(
        frames=merged,
        guessed=guessed,
        matched=reconstruction.matched,
        deltas=reconstruction.deltas,
        confidence=reconstruction.confidence,
        game=_game_out(merged),
    )


@router.post("/stats", response_model=StatsOut)
@limiter.limit(scoring_rate_limit)
async def stats(request: Request, body: StatsIn) -> StatsOut:
    per_game = [
        game_stats(bowling.resolve_frames(_checked_frames(frames)))
        for frames in body.games
    ]
    return StatsOut(
        games=[GameStatsOut(**s) for s in per_game],
        series=SeriesStatsOut(**series_stats([int(s["score"]) for s in per_game])),
    )
