"""Ten-pin bowling scoring engine.

A game is ten frames of recorded rolls. Frame kinds and scores are always
derived from the rolls on read, so an edit can never leave a stale
classification behind. Resolution is a single left-to-right pass: a frame's
bonus only ever borrows balls from frames with a larger index.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

FRAMES = 10
PINS = 10
TENTH = FRAMES - 1
PERFECT_GAME = 300


class FrameKind(str, Enum):
    INCOMPLETE = "incomplete"
    OPEN = "open"
    SPARE = "spare"
    STRIKE = "strike"


@dataclass(frozen=True)
class Frame:
    """Recorded rolls of a single frame (0-2 balls, 0-3 in the tenth)."""

    rolls: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rolls", tuple(self.rolls))


@dataclass(frozen=True)
class ScoredFrame:
    index: int
    rolls: Tuple[int, ...]
    kind: FrameKind
    frame_score: Optional[int] = None
    cumulative_score: Optional[int] = None

    @property
    def resolved(self) -> bool:
        return self.cumulative_score is not None


class RollResult(NamedTuple):
    accepted: bool
    frames: List[Frame]
    reason: Optional[str] = None


FrameLike = Any  # Frame, ScoredFrame or a plain sequence of ints


def _rolls(frame: FrameLike) -> Tuple[int, ...]:
    if isinstance(frame, (Frame, ScoredFrame)):
        return frame.rolls
    if frame is None:
        return ()
    return tuple(frame)


def _normalize(frames: Sequence[FrameLike]) -> List[Tuple[int, ...]]:
    rolls = [_rolls(f) for f in frames]
    if len(rolls) != FRAMES:
        raise ValueError(f"a game has exactly {FRAMES} frames (got {len(rolls)})")
    for index, frame_rolls in enumerate(rolls):
        check_frame(frame_rolls, index)
    return rolls


def new_game() -> List[Frame]:
    return [Frame() for _ in range(FRAMES)]


def _pins_standing(rolls: Sequence[int]) -> int:
    """Pins standing for the next ball of a frame.

    A cleared rack is reset before the next ball.
    """
    standing = PINS
    for ball in rolls:
        standing -= ball
        if standing <= 0:
            standing = PINS
    return standing


def _tenth_frame_length(rolls: Sequence[int]) -> int:
    """Number of balls the tenth frame holds once finished (2 or 3)."""
    if rolls and rolls[0] == PINS:
        return 3
    if len(rolls) >= 2 and rolls[0] + rolls[1] == PINS:
        return 3
    return 2


# ---------------------------------------------------------------------------
# Roll validation
# ---------------------------------------------------------------------------
def validate_roll(
    value: Any,
    frame_index: int,
    roll_position: int,
    frame_rolls: Sequence[int] = (),
) -> bool:
    """Return ``True`` when ``value`` is a legal ball at the given slot.

    ``frame_rolls`` holds the balls already recorded in the frame; only the
    ones before ``roll_position`` are considered.
    """
    # bool is a subclass of int; a checkbox value is not a pin count
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    if not 0 <= value <= PINS:
        return False
    if not 0 <= frame_index < FRAMES:
        return False

    prior = tuple(frame_rolls)[: roll_position - 1]
    if len(prior) < roll_position - 1:
        return False

    if roll_position == 1:
        return True

    if roll_position == 2:
        first = prior[0]
        if frame_index < TENTH:
            return first < PINS and value <= PINS - first
        if first == PINS:
            return True
        return value <= PINS - first

    if roll_position == 3:
        if frame_index != TENTH:
            return False
        first, second = prior
        if first == PINS:
            # Second ball after the opening strike either cleared a fresh
            # rack or left pins that the third ball must come from.
            return second == PINS or value <= PINS - second
        return first + second == PINS

    return False


def check_frame(rolls: Sequence[Any], frame_index: int) -> None:
    """Raise ``ValueError`` unless every recorded ball of the frame is legal."""
    for position, ball in enumerate(rolls, start=1):
        if not validate_roll(ball, frame_index, position, rolls):
            raise ValueError(
                f"frame {frame_index + 1} roll {position} ({ball!r}) is not a legal roll"
            )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------
def classify_frame(frame: FrameLike, is_tenth: bool = False) -> FrameKind:
    rolls = _rolls(frame)
    check_frame(rolls, TENTH if is_tenth else 0)
    if not rolls:
        return FrameKind.INCOMPLETE
    first = rolls[0]
    if not is_tenth:
        if first == PINS:
            return FrameKind.STRIKE
        if len(rolls) < 2:
            return FrameKind.INCOMPLETE
        return FrameKind.SPARE if first + rolls[1] == PINS else FrameKind.OPEN

    if len(rolls) < _tenth_frame_length(rolls):
        return FrameKind.INCOMPLETE
    if first == PINS:
        return FrameKind.STRIKE
    if first + rolls[1] == PINS:
        return FrameKind.SPARE
    return FrameKind.OPEN


def _is_complete(rolls: Sequence[int], index: int) -> bool:
    return classify_frame(rolls, index == TENTH) is not FrameKind.INCOMPLETE


def frame_marks(frame: FrameLike) -> List[str]:
    """Render a frame in score-sheet notation (``X``, ``/``, ``-``, digits)."""
    marks: List[str] = []
    standing = PINS
    fresh = True
    for ball in _rolls(frame):
        if fresh and ball == PINS:
            marks.append("X")
        elif not fresh and ball == standing:
            marks.append("/")
        elif ball == 0:
            marks.append("-")
        else:
            marks.append(str(ball))
        standing -= ball
        if standing <= 0:
            standing, fresh = PINS, True
        else:
            fresh = False
    return marks


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------
def _balls_after(frames: Sequence[Tuple[int, ...]], index: int) -> Iterator[int]:
    """Yield the balls bowled after frame ``index``, stopping at the first gap."""
    for j in range(index + 1, FRAMES):
        rolls = frames[j]
        yield from rolls
        if not _is_complete(rolls, j):
            return


def _frame_points(frames: Sequence[Tuple[int, ...]], index: int) -> Optional[int]:
    rolls = frames[index]
    kind = classify_frame(rolls, index == TENTH)
    if kind is FrameKind.INCOMPLETE:
        return None
    if index == TENTH or kind is FrameKind.OPEN:
        return sum(rolls)
    needed = 2 if kind is FrameKind.STRIKE else 1
    bonus = list(islice(_balls_after(frames, index), needed))
    if len(bonus) < needed:
        return None
    return PINS + sum(bonus)


def resolve_frames(frames: Sequence[FrameLike]) -> List[ScoredFrame]:
    """Classify and score every frame of a game.

    Frames whose bonus balls have not been bowled yet, and every frame after
    them, keep ``frame_score`` and ``cumulative_score`` as ``None``.
    """
    rolls = _normalize(frames)
    scored: List[ScoredFrame] = []
    running = 0
    blocked = False
    for index, frame_rolls in enumerate(rolls):
        kind = classify_frame(frame_rolls, index == TENTH)
        points = None if blocked else _frame_points(rolls, index)
        if points is None:
            if not blocked:
                logger.debug("frame %d unresolved; scoring stops there", index + 1)
            blocked = True
            scored.append(ScoredFrame(index, frame_rolls, kind))
            continue
        running += points
        scored.append(ScoredFrame(index, frame_rolls, kind, points, running))
    return scored


def current_score(scored: Sequence[ScoredFrame]) -> int:
    """Cumulative score of the last resolved frame, 0 before any resolves."""
    total = 0
    for frame in scored:
        if frame.cumulative_score is None:
            break
        total = frame.cumulative_score
    return total


def first_incomplete_frame(frames: Sequence[FrameLike]) -> int:
    """Index of the first frame still taking balls, ``10`` once the game is over."""
    for index, rolls in enumerate(_normalize(frames)):
        if not _is_complete(rolls, index):
            return index
    return FRAMES


def is_complete(frames: Sequence[FrameLike]) -> bool:
    return first_incomplete_frame(frames) == FRAMES


# ---------------------------------------------------------------------------
# Maximum possible score
# ---------------------------------------------------------------------------
def _best_finish(rolls: Tuple[int, ...], index: int) -> Tuple[int, ...]:
    """Complete a frame by knocking down every pin still standing."""
    balls = list(rolls)
    if index < TENTH:
        if not balls:
            balls.append(PINS)
        elif len(balls) == 1 and balls[0] < PINS:
            balls.append(PINS - balls[0])
        return tuple(balls)
    while len(balls) < _tenth_frame_length(balls):
        balls.append(_pins_standing(balls))
    return tuple(balls)


def projection_start(
    frames: Sequence[FrameLike], first_incomplete: Optional[int] = None
) -> int:
    """Frame the max-score projection starts from.

    A caller-supplied index is clamped to ``[0, first_incomplete_frame]`` so
    it can never skip an unfinished frame.
    """
    actual = first_incomplete_frame(frames)
    if first_incomplete is None:
        return actual
    return max(0, min(first_incomplete, actual))


def max_possible_score(
    frames: Sequence[FrameLike], first_incomplete: Optional[int] = None
) -> int:
    """Highest final score still reachable if every remaining ball clears the rack.

    Frames from :func:`projection_start` on are completed with the best
    balls still available, recorded balls kept as they are.
    """
    rolls = _normalize(frames)
    start = projection_start(rolls, first_incomplete)

    projected = rolls[:start] + [
        _best_finish(frame_rolls, index)
        for index, frame_rolls in enumerate(rolls[start:], start)
    ]
    # every projected frame is complete, so the tenth always resolves
    return resolve_frames(projected)[TENTH].cumulative_score


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------
def next_roll_position(frames: Sequence[FrameLike]) -> Optional[Tuple[int, int]]:
    """``(frame_index, roll_position)`` of the next ball, ``None`` once the game is over."""
    index = first_incomplete_frame(frames)
    if index == FRAMES:
        return None
    return index, len(_rolls(frames[index])) + 1


def _max_balls(index: int) -> int:
    return 3 if index == TENTH else 2


def record_roll(
    frames: Sequence[FrameLike],
    value: Any,
    frame_index: Optional[int] = None,
    roll_position: Optional[int] = None,
) -> RollResult:
    """Apply one validated edit and return the new frames.

    Without an explicit slot the ball goes to :func:`next_roll_position`.
    With one, the ball at that slot is replaced (or appended right after the
    last recorded ball); later balls of the same frame that the new value
    makes illegal are dropped. A rejected edit returns the frames unchanged.
    """
    current = [Frame(r) for r in _normalize(frames)]

    if frame_index is None:
        slot = next_roll_position(current)
        if slot is None:
            return RollResult(False, current, "game is complete")
        frame_index, roll_position = slot

    if not 0 <= frame_index < FRAMES:
        return RollResult(False, current, f"frame {frame_index + 1} does not exist")

    rolls = list(current[frame_index].rolls)
    if roll_position is None:
        roll_position = len(rolls) + 1
    if not 1 <= roll_position <= min(len(rolls) + 1, _max_balls(frame_index)):
        return RollResult(
            False,
            current,
            f"frame {frame_index + 1} has no roll {roll_position} to record",
        )

    if not validate_roll(value, frame_index, roll_position, rolls):
        logger.debug(
            "rejected roll %r at frame %d roll %d", value, frame_index + 1, roll_position
        )
        return RollResult(
            False,
            current,
            f"{value!r} is not a legal roll for frame {frame_index + 1} roll {roll_position}",
        )

    updated = rolls[: roll_position - 1] + [value]
    for later in rolls[roll_position:]:
        position = len(updated) + 1
        if position > _max_balls(frame_index) or not validate_roll(
            later, frame_index, position, updated
        ):
            break
        updated.append(later)
    if frame_index == TENTH:
        updated = updated[: _tenth_frame_length(updated)]

    result = list(current)
    result[frame_index] = Frame(updated)
    return RollResult(True, result)


# ---------------------------------------------------------------------------
# Persistence rows
# ---------------------------------------------------------------------------
_ROW_KEYS = ("first", "second", "third")


def serialize_frames(scored: Sequence[ScoredFrame]) -> List[Dict[str, Optional[int]]]:
    rows: List[Dict[str, Optional[int]]] = []
    for frame in scored:
        row: Dict[str, Optional[int]] = {
            key: (frame.rolls[i] if i < len(frame.rolls) else None)
            for i, key in enumerate(_ROW_KEYS)
        }
        row["score"] = frame.cumulative_score
        rows.append(row)
    return rows


def deserialize_frames(rows: Sequence[Dict[str, Any]]) -> List[Frame]:
    """Rebuild frames from stored rows; stored scores are ignored and recomputed."""
    frames: List[Frame] = []
    for row in rows:
        balls: List[int] = []
        for key in _ROW_KEYS:
            value = row.get(key)
            if value is None:
                break
            balls.append(int(value))
        frames.append(Frame(balls))
    while len(frames) < FRAMES:
        frames.append(Frame())
    return frames


# ---------------------------------------------------------------------------
# Event interface shared with the other scoring engines
# ---------------------------------------------------------------------------
def init_state(config: Dict) -> Dict:
    return {
        "config": config,
        "frames": [[] for _ in range(FRAMES)],
    }


def apply(event: Dict, state: Dict) -> Dict:
    if event.get("type") != "ROLL":
        raise ValueError("invalid bowling event")
    raw = event.get("pins", 0)
    # bool is an int subclass and int() truncates floats; neither is a pin count
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValueError("pins must be an integer")
    try:
        pins = int(raw)
    except (TypeError, ValueError):
        raise ValueError("pins must be an integer")
    result = record_roll(state["frames"], pins)
    if not result.accepted:
        raise ValueError(result.reason)
    state["frames"] = [list(frame.rolls) for frame in result.frames]
    return state


def summary(state: Dict) -> Dict:
    frames = state["frames"]
    scored = resolve_frames(frames)
    return {
        "frames": frames,
        "kinds": [frame.kind.value for frame in scored],
        "scores": [frame.frame_score for frame in scored],
        "cumulative": [frame.cumulative_score for frame in scored],
        "total": current_score(scored),
        "maxPossible": max_possible_score(frames),
        "complete": is_complete(frames),
    }
