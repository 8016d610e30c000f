from typing import Any, List, Optional, Sequence

from ..scoring.bowling import FRAMES, PERFECT_GAME, TENTH, validate_roll


class ValidationError(Exception):
    """Raised when a submitted game or score sheet is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _coerce_int(raw: Any, label: str) -> int:
    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(raw, bool):
        raise ValidationError(f"{label} must be an integer (not a boolean).")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValidationError(f"{label} must be an integer.")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")


def validate_frame_rolls(frames: Sequence[Any]) -> List[List[int]]:
    """Validate and normalise the recorded rolls of a whole game.

    Rules:
    - Exactly ten frames, each a list of integers
    - Frames 1-9 hold at most two balls, frame 10 at most three
    - Every ball is legal given the balls before it in the same frame
    """

    if not _is_sequence(frames):
        raise ValidationError("Frames must be provided as a list of roll lists.")
    if len(frames) != FRAMES:
        raise ValidationError(f"A game has exactly {FRAMES} frames (got {len(frames)}).")

    normalized: List[List[int]] = []
    for index, raw_frame in enumerate(frames):
        number = index + 1
        if raw_frame is None:
            raw_frame = []
        if not _is_sequence(raw_frame):
            raise ValidationError(f"Frame #{number} must be a list of rolls.")
        limit = 3 if index == TENTH else 2
        if len(raw_frame) > limit:
            raise ValidationError(f"Frame #{number} holds at most {limit} rolls.")

        rolls: List[int] = []
        for position, raw in enumerate(raw_frame, start=1):
            value = _coerce_int(raw, f"Frame #{number} roll #{position}")
            if not validate_roll(value, index, position, rolls):
                raise ValidationError(
                    f"Frame #{number} roll #{position} ({value}) is not a legal roll."
                )
            rolls.append(value)
        normalized.append(rolls)

    return normalized


def validate_score_totals(
    totals: Sequence[Any],
    *,
    min_value: int = 0,
    max_value: int = PERFECT_GAME,
) -> List[Optional[int]]:
    """Validate per-frame running totals read off a score sheet.

    Unknown totals are ``None``; known totals must be integers within range
    and never decrease from one frame to a later one.
    """
    if not _is_sequence(totals):
        raise ValidationError("Totals must be provided as a sequence of integers.")
    if len(totals) != FRAMES:
        raise ValidationError(f"Totals must include exactly {FRAMES} values.")

    normalized: List[Optional[int]] = []
    previous: Optional[int] = None
    for index, raw in enumerate(totals, start=1):
        if raw is None:
            normalized.append(None)
            continue
        value = _coerce_int(raw, f"Total #{index}")

        if value < min_value:
            raise ValidationError(
                f"Total #{index} must be greater than or equal to {min_value}."
            )
        if max_value is not None and value > max_value:
            raise ValidationError(
                f"Total #{index} must be less than or equal to {max_value}."
            )
        if previous is not None and value < previous:
            raise ValidationError(
                f"Total #{index} must not be lower than an earlier total."
            )
        previous = value
        normalized.append(value)

    return normalized
