"""Daily Arcade — daily-rotating arcade minigames with seeded variations."""

__version__ = "0.1.0"
