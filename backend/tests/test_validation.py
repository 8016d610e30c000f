import pytest
from bowlscore.services.validation import (
    ValidationError,
    validate_frame_rolls,
    validate_score_totals,
)


def _game(*frames):
    return [list(f) for f in frames] + [[] for _ in range(10 - len(frames))]


def test_accepts_valid_games() -> None:
    assert validate_frame_rolls(_game()) == [[]] * 10
    assert validate_frame_rolls(_game(*[[10]] * 9, [10, 10, 10]))[9] == [10, 10, 10]
    assert validate_frame_rolls(_game([7, 3], [4]))[:2] == [[7, 3], [4]]


def test_none_frame_is_empty() -> None:
    frames = [None] + [[]] * 9
    assert validate_frame_rolls(frames)[0] == []


def test_integral_floats_are_normalized() -> None:
    assert validate_frame_rolls(_game([7.0, 2]))[0] == [7, 2]


@pytest.mark.parametrize(
    "frames, msg",
    [
        ([[]] * 9, "exactly 10 frames"),
        ("not a list", "list of roll lists"),
        (["xx"] + [[]] * 9, "must be a list of rolls"),
        (_game([1, 2, 3]), "at most 2 rolls"),
        (_game(*[[0, 0]] * 9, [10, 10, 10, 10]), "at most 3 rolls"),
        (_game([True]), "not a boolean"),
        (_game(["x"]), "must be an integer"),
        (_game([7.5]), "must be an integer"),
        (_game([11]), "not a legal roll"),
        (_game([-1]), "not a legal roll"),
        (_game([10, 0]), "not a legal roll"),
        (_game(*[[0, 0]] * 9, [3, 4, 1]), "not a legal roll"),
        (_game(*[[0, 0]] * 9, [10, 4, 7]), "not a legal roll"),
    ],
    ids=[
        "nine-frames",
        "not-a-list",
        "string-frame",
        "three-balls",
        "four-balls-tenth",
        "boolean",
        "non-integer",
        "fractional",
        "too-many-pins",
        "negative",
        "ball-after-strike",
        "bonus-after-open-tenth",
        "bonus-over-standing-pins",
    ],
)
def test_rejects_invalid_games(frames, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_frame_rolls(frames)  # type: ignore[arg-type]
    assert msg.lower() in str(exc.value).lower()


def test_accepts_partial_totals() -> None:
    totals = [20, 37, None, None, 60, 60, 61, None, 90, 100]
    assert validate_score_totals(totals) == totals


@pytest.mark.parametrize(
    "totals, msg",
    [
        ([10] * 9, "exactly 10"),
        ("0123456789", "sequence of integers"),
        ([-1] + [0] * 9, "greater than or equal to 0"),
        ([301] * 10, "less than or equal to 300"),
        ([20, 10] + [None] * 8, "lower than an earlier total"),
        ([20, None, 10] + [None] * 7, "lower than an earlier total"),
        ([False] + [None] * 9, "not a boolean"),
    ],
    ids=["short", "string", "negative", "over-perfect", "decreasing", "decreasing-over-gap", "boolean"],
)
def test_rejects_invalid_totals(totals, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_score_totals(totals)  # type: ignore[arg-type]
    assert msg.lower() in str(exc.value).lower()
