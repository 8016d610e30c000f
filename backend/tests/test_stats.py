import pytest

from bowlscore.scoring import bowling
from bowlscore.services.stats import game_stats, series_stats


def _scored(*frames):
    rolls = [list(f) for f in frames] + [[] for _ in range(10 - len(frames))]
    return bowling.resolve_frames(rolls)


def test_game_stats_counts_marks():
    scored = _scored([10], [7, 3], [9, 0], [10], [0, 8], [8, 2], [0, 6], [10], [10], [10, 8, 1])
    stats = game_stats(scored)
    assert stats["strikes"] == 5
    assert stats["spares"] == 2
    assert stats["opens"] == 3
    assert stats["pins"] == 10 + 10 + 9 + 10 + 8 + 10 + 6 + 10 + 10 + 19
    assert stats["score"] == 167
    assert stats["firstBallAverage"] == pytest.approx(7.4)


def test_tenth_frame_bonus_balls_are_not_extra_strikes():
    stats = game_stats(_scored(*[[10]] * 9, [10, 10, 10]))
    assert stats["strikes"] == 10
    assert stats["score"] == 300


def test_game_stats_partial_game():
    stats = game_stats(_scored([10], [3]))
    assert stats["strikes"] == 1
    assert stats["opens"] == 0
    assert stats["score"] == 0
    assert stats["firstBallAverage"] == pytest.approx(6.5)


def test_game_stats_empty_game():
    stats = game_stats(_scored())
    assert stats["pins"] == 0
    assert stats["firstBallAverage"] == 0.0


def test_series_stats():
    stats = series_stats([300, 150, 90, 181])
    assert stats == {
        "games": 4,
        "total": 721,
        "average": 180,
        "highScore": 300,
        "lowScore": 90,
        "perfectGames": 1,
        "under100": 1,
    }


def test_series_stats_empty():
    stats = series_stats([])
    assert stats["games"] == 0
    assert stats["average"] == 0
