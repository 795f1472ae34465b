"""In-memory storage."""

from daily_arcade.storage.memory import MemStorage
from daily_arcade.storage.models import Game, NewGame, Score, User

__all__ = ["Game", "MemStorage", "NewGame", "Score", "User"]
