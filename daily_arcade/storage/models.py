"""Storage records: users, games and scores."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any

from daily_arcade.core.catalog import DEFAULT_INSTRUCTIONS, GAME_ICONS, GAME_INSTRUCTIONS
from daily_arcade.core.enums import GameType
from daily_arcade.core.parameters import GameParameters, GameVariation, dump_parameters, parse_parameters


@dataclass(frozen=True, slots=True)
class User:
    id: int
    username: str


@dataclass(frozen=True, slots=True)
class Game:
    """A dated catalog entry. ``parameters`` is the stored JSON document."""

    id: int
    name: str
    type: GameType
    description: str
    instructions: str
    date: str
    icon: str
    parameters: str = "{}"
    variation_id: int = 0

    def parsed_parameters(self) -> GameParameters:
        """Decode ``parameters``; raises ``InvalidParametersError`` when corrupt."""
        return parse_parameters(self.parameters)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "instructions": self.instructions,
            "date": self.date,
            "icon": self.icon,
            "parameters": self.parameters,
            "variationId": self.variation_id,
        }


@dataclass(frozen=True, slots=True)
class NewGame:
    """Fields of a game before storage assigns its id."""

    name: str
    type: GameType
    description: str
    instructions: str
    date: str
    icon: str
    parameters: str = "{}"
    variation_id: int = 0

    @classmethod
    def from_variation(cls, variation: GameVariation, date: str | None = None) -> NewGame:
        return cls(
            name=variation.name,
            type=variation.game_type,
            description=variation.description,
            instructions=GAME_INSTRUCTIONS.get(variation.game_type, DEFAULT_INSTRUCTIONS),
            date=date or variation.date_created,
            icon=GAME_ICONS.get(variation.game_type, "gamepad"),
            parameters=dump_parameters(variation.parameters),
            variation_id=variation.id,
        )


@dataclass(frozen=True, slots=True)
class Score:
    id: int
    game_id: int
    user_id: int
    score: int
    date: str
    timestamp: dt.datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gameId": self.game_id,
            "userId": self.user_id,
            "score": self.score,
            "date": self.date,
            "timestamp": self.timestamp.isoformat(),
        }
