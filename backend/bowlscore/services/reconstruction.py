"""Best-effort frame reconstruction from per-frame running totals.

Running totals read off a score sheet do not determine the individual balls:
many roll splits produce the same frame delta. The frames produced here are
guesses that reproduce the totals where they can, and are always flagged as
such. Anything the bowler corrects afterwards replaces the guess outright.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from ..config import RECONSTRUCTION_WARN_CONFIDENCE
from ..scoring.bowling import FRAMES, PINS, TENTH, Frame, check_frame, resolve_frames

logger = logging.getLogger(__name__)

# Ceiling for any reconstruction: matching totals never prove the rolls.
BASE_CONFIDENCE = 0.7
DEFAULT_SPARE_FIRST_BALL = 5
MAX_FRAME_POINTS = 3 * PINS


@dataclass
class Reconstruction:
    frames: List[Frame]
    guessed: List[bool]
    deltas: List[Optional[int]]
    matched: List[bool]
    confidence: float


def frame_deltas(totals: Sequence[Optional[int]]) -> List[Optional[int]]:
    """Points added by each frame; ``None`` where either bounding total is unknown."""
    deltas: List[Optional[int]] = []
    previous: Optional[int] = 0
    for total in totals:
        if total is None or previous is None:
            deltas.append(None)
        else:
            deltas.append(total - previous)
        previous = total
    return deltas


def _split_open(delta: int, first_hint: Optional[int]) -> Tuple[int, int]:
    if first_hint is not None and first_hint <= delta:
        first = first_hint
    else:
        first = (delta + 1) // 2
    return first, delta - first


def _guess_tenth(delta: int, first_hint: Optional[int]) -> Tuple[int, ...]:
    if delta >= 2 * PINS:
        return PINS, PINS, delta - 2 * PINS
    if delta >= PINS:
        if first_hint == PINS:
            return PINS, delta - PINS, 0
        first = first_hint if first_hint is not None else DEFAULT_SPARE_FIRST_BALL
        return first, PINS - first, delta - PINS
    return _split_open(delta, first_hint)


def _guess_frame(index: int, delta: int, first_hint: Optional[int]) -> Tuple[int, ...]:
    if index == TENTH:
        return _guess_tenth(delta, first_hint)
    if delta >= 2 * PINS or (delta >= PINS and first_hint == PINS):
        return (PINS,)
    if delta >= PINS:
        if first_hint is not None and first_hint < PINS:
            return first_hint, PINS - first_hint
        return DEFAULT_SPARE_FIRST_BALL, PINS - DEFAULT_SPARE_FIRST_BALL
    return _split_open(delta, first_hint)


def _next_first_ball(
    rolls: Tuple[int, ...],
    delta: int,
    previous: Tuple[int, ...],
    previous_delta: Optional[int],
) -> Optional[int]:
    """First ball of the following frame implied by the bonus this frame earned."""
    hint: Optional[int] = None
    if len(rolls) == 2 and rolls[0] < PINS and sum(rolls) == PINS:
        hint = delta - PINS
    elif rolls == (PINS,):
        if previous == (PINS,) and previous_delta is not None:
            hint = previous_delta - 2 * PINS
        elif delta > 2 * PINS:
            # two balls from one rack never add more than ten
            hint = PINS
    if hint is not None and 0 <= hint <= PINS:
        return hint
    return None


def reconstruct_frames(totals: Sequence[Optional[int]]) -> Reconstruction:
    """Guess a frame sequence consistent with ten running totals.

    Frame deltas of 20 or more become strikes, 10-19 spares (first guess
    5/5) and anything lower an open frame split roughly in half. Bonus
    points a mark earned are carried into the next frame's first ball so the
    guessed rolls reproduce the totals whenever a consistent split exists.
    """
    if len(totals) != FRAMES:
        raise ValueError(f"expected {FRAMES} totals (got {len(totals)})")

    deltas = frame_deltas(totals)
    frames: List[Frame] = []
    guessed: List[bool] = []
    hint: Optional[int] = None
    previous: Tuple[int, ...] = ()
    previous_delta: Optional[int] = None

    for index, delta in enumerate(deltas):
        if delta is None or not 0 <= delta <= MAX_FRAME_POINTS:
            frames.append(Frame())
            guessed.append(False)
            hint, previous, previous_delta = None, (), None
            continue
        rolls = _guess_frame(index, delta, hint)
        frames.append(Frame(rolls))
        guessed.append(True)
        hint = _next_first_ball(rolls, delta, previous, previous_delta)
        previous, previous_delta = rolls, delta

    scored = resolve_frames(frames)
    matched = [
        total is not None and frame.cumulative_score == total
        for total, frame in zip(totals, scored)
    ]
    known = sum(1 for total in totals if total is not None)
    confidence = round(BASE_CONFIDENCE * sum(matched) / known, 2) if known else 0.0

    if confidence < RECONSTRUCTION_WARN_CONFIDENCE:
        logger.info(
            "Low-confidence reconstruction (%.2f): %d of %d totals reproduced",
            confidence,
            sum(matched),
            known,
        )

    return Reconstruction(
        frames=frames,
        guessed=guessed,
        deltas=deltas,
        matched=matched,
        confidence=confidence,
    )


def merge_reconstruction(
    reconstruction: Reconstruction,
    edited: Optional[Mapping[int, Sequence[int]]] = None,
) -> List[Frame]:
    """Overlay frames the bowler entered or corrected on top of the guesses.

    Edited frames always win; a guess never replaces them. An edit outside
    the game or holding an illegal ball raises ``ValueError``.
    """
    edited = edited or {}
    for index, rolls in edited.items():
        if not 0 <= index < FRAMES:
            raise ValueError(f"frame {index + 1} does not exist")
        check_frame(tuple(rolls), index)

    merged: List[Frame] = []
    for index, guess in enumerate(reconstruction.frames):
        if index in edited:
            merged.append(Frame(edited[index]))
        else:
            merged.append(guess)
    return merged
