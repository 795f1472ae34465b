"""Arcade configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ArcadeConfig:
    """Immutable configuration for the arcade server and engines."""

    # Canvas (fixed so that seeded layouts are reproducible)
    canvas_width: int = 640
    canvas_height: int = 480

    # Timing
    frames_per_second: int = 60
    wave_delay_frames: int = 60            # Space Invaders pause before the next wave

    # Catalog
    max_samples: int = 50                  # Upper bound for /variations/samples
    default_score_limit: int = 5           # Leaderboard size when ?limit is omitted
    catalog_days_before: int = 3           # Daily games pre-generated before today
    catalog_days_after: int = 3            # ... and after today

    # Play session
    autostart: bool = True                 # Start the frame loop as soon as a game is loaded
    completed_history: int = 100           # Finished episodes kept by the session manager

    # Logging
    log_level: str = "INFO"
    replay_file: str = "replay.json"

    @property
    def frame_interval(self) -> float:
        """Seconds between frames for wall-clock paced drivers."""
        return 1.0 / max(self.frames_per_second, 1)
