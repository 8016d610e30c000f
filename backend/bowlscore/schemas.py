from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .scoring.bowling import FrameKind


class GameIn(BaseModel):
    """Ten frames of recorded rolls; an empty list is a frame not yet bowled."""

    frames: List[List[int]] = Field(..., description="Rolls per frame, frame 1 first")

    model_config = ConfigDict(extra="forbid")


class FrameOut(BaseModel):
    index: int
    rolls: List[int]
    kind: FrameKind
    marks: List[str]
    frameScore: Optional[int] = None
    cumulativeScore: Optional[int] = None


class FrameRow(BaseModel):
    first: Optional[int] = None
    second: Optional[int] = None
    third: Optional[int] = None
    score: Optional[int] = None


class GameOut(BaseModel):
    frames: List[FrameOut]
    rows: List[FrameRow]
    total: int
    maxPossible: int
    firstIncompleteFrame: int
    complete: bool


class RollValidateIn(BaseModel):
    value: int
    frameIndex: int = Field(..., ge=0, le=9)
    rollPosition: int = Field(..., ge=1, le=3)
    frameRolls: List[int] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class RollValidateOut(BaseModel):
    valid: bool


class RollIn(GameIn):
    value: int
    frameIndex: Optional[int] = Field(None, ge=0, le=9)
    rollPosition: Optional[int] = Field(None, ge=1, le=3)


class MaxScoreIn(GameIn):
    firstIncompleteFrame: Optional[int] = Field(None, ge=0, le=10)


class MaxScoreOut(BaseModel):
    maxPossible: int
    firstIncompleteFrame: int


class ReconstructIn(BaseModel):
    totals: List[Optional[int]]
    edited: Dict[int, List[int]] = Field(
        default_factory=dict,
        description="Frames the bowler entered by hand, keyed by frame index",
    )

    model_config = ConfigDict(extra="forbid")


class ReconstructOut(BaseModel):
    frames: List[List[int]]
    guessed: List[bool]
    matched: List[bool]
    deltas: List[Optional[int]]
    confidence: float
    game: GameOut


class StatsIn(BaseModel):
    games: List[List[List[int]]]

    model_config = ConfigDict(extra="forbid")


class GameStatsOut(BaseModel):
    strikes: int
    spares: int
    opens: int
    pins: int
    firstBallAverage: float
    score: int


class SeriesStatsOut(BaseModel):
    games: int
    total: int
    average: int
    highScore: int
    lowScore: int
    perfectGames: int
    under100: int


class StatsOut(BaseModel):
    games: List[GameStatsOut]
    series: SeriesStatsOut
