"""MemStorage — process-lifetime store for users, games and scores."""

from __future__ import annotations

import datetime as dt
import itertools
import logging
import random
import threading
from dataclasses import asdict

from daily_arcade.storage.models import Game, NewGame, Score, User
from daily_arcade.systems.variation_generator import generate_daily_game

logger = logging.getLogger(__name__)

GUEST_NUMBER_RANGE = 10_000
GUEST_NAME_ATTEMPTS = 20


class MemStorage:
    """Dict-backed storage with monotonically increasing ids.

    One lock guards all three tables; nothing here blocks for long.
    """

    def __init__(
        self,
        today: dt.date | None = None,
        days_before: int = 3,
        days_after: int = 3,
    ) -> None:
        self._users: dict[int, User] = {}
        self._games: dict[int, Game] = {}
        self._scores: dict[int, Score] = {}
        self._user_ids = itertools.count(1)
        self._game_ids = itertools.count(1)
        self._score_ids = itertools.count(1)
        self._lock = threading.Lock()
        self._seed_week(today or dt.date.today(), days_before, days_after)

    def _seed_week(self, today: dt.date, days_before: int, days_after: int) -> None:
        for offset in range(-days_before, days_after + 1):
            date = (today + dt.timedelta(days=offset)).isoformat()
            self.create_game(NewGame.from_variation(generate_daily_game(date)))
        logger.info("Seeded %d daily games around %s", len(self._games), today.isoformat())

    # -- users --

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, username: str) -> User:
        with self._lock:
            user = User(id=next(self._user_ids), username=username)
            self._users[user.id] = user
        logger.info("Created user #%d '%s'", user.id, username)
        return user

    def create_guest_user(self) -> User:
        """Create a user named ``Guest_<n>`` that no other user holds.

        Picks a few random numbers below ``GUEST_NUMBER_RANGE``; once those
        collide, the number is derived from the new user's id instead.
        """
        with self._lock:
            taken = {u.username for u in self._users.values()}
            username = None
            for _ in range(GUEST_NAME_ATTEMPTS):
                candidate = f"Guest_{random.randrange(GUEST_NUMBER_RANGE)}"
                if candidate not in taken:
                    username = candidate
                    break

            user_id = next(self._user_ids)
            if username is None:
                number = GUEST_NUMBER_RANGE + user_id
                while f"Guest_{number}" in taken:
                    number += GUEST_NUMBER_RANGE
                username = f"Guest_{number}"

            user = User(id=user_id, username=username)
            self._users[user.id] = user
        logger.info("Created guest user #%d '%s'", user.id, username)
        return user

    # -- games --

    def get_games(self) -> list[Game]:
        with self._lock:
            return list(self._games.values())

    def get_game(self, game_id: int) -> Game | None:
        with self._lock:
            return self._games.get(game_id)

    def get_game_by_date(self, date: str) -> Game | None:
        with self._lock:
            return next((g for g in self._games.values() if g.date == date), None)

    def create_game(self, new_game: NewGame) -> Game:
        with self._lock:
            game = self._insert_game(new_game)
        logger.info("Created game #%d (%s, %s)", game.id, game.type.value, game.date)
        return game

    def ensure_daily_game(self, date: str) -> Game:
        """Return the game stored for *date*, generating and storing it if absent."""
        existing = self.get_game_by_date(date)
        if existing is not None:
            return existing

        new_game = NewGame.from_variation(generate_daily_game(date), date)
        # Another request may have stored the date while the variation was generated
        with self._lock:
            existing = next((g for g in self._games.values() if g.date == date), None)
            if existing is not None:
                return existing
            game = self._insert_game(new_game)
        logger.info("Created daily game #%d (%s, %s)", game.id, game.type.value, game.date)
        return game

    def _insert_game(self, new_game: NewGame) -> Game:
        # Caller holds self._lock
        game = Game(id=next(self._game_ids), **asdict(new_game))
        self._games[game.id] = game
        return game

    # -- scores --

    def get_scores(self, game_id: int, limit: int | None = None) -> list[Score]:
        """Scores for a game, newest first."""
        with self._lock:
            scores = [s for s in self._scores.values() if s.game_id == game_id]
        scores.sort(key=lambda s: (s.timestamp, s.id), reverse=True)
        return scores[:limit] if limit else scores

    def get_top_scores(self, game_id: int, limit: int = 5) -> list[Score]:
        """Highest scores first; equal scores keep submission order."""
        with self._lock:
            scores = [s for s in self._scores.values() if s.game_id == game_id]
        scores.sort(key=lambda s: (-s.score, s.id))
        return scores[:limit] if limit else scores

    def create_score(self, game_id: int, user_id: int, score: int, date: str) -> Score:
        with self._lock:
            record = Score(
                id=next(self._score_ids),
                game_id=game_id,
                user_id=user_id,
                score=score,
                date=date,
                timestamp=dt.datetime.now(dt.timezone.utc),
            )
            self._scores[record.id] = record
        logger.info("Recorded score %d for game #%d by user #%d", score, game_id, user_id)
        return record

    def get_user_scores(self, user_id: int) -> list[Score]:
        with self._lock:
            return sorted(
                (s for s in self._scores.values() if s.user_id == user_id),
                key=lambda s: s.id,
            )
