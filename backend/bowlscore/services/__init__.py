"""Internal application services (pure helpers, no I/O)."""

from .validation import ValidationError, validate_frame_rolls, validate_score_totals
from .reconstruction import Reconstruction, merge_reconstruction, reconstruct_frames
from .stats import game_stats, series_stats

__all__ = [
    "ValidationError",
    "validate_frame_rolls",
    "validate_score_totals",
    "Reconstruction",
    "reconstruct_frames",
    "merge_reconstruction",
    "game_stats",
    "series_stats",
]
