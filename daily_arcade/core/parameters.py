"""GameParameters / GameVariation value objects and their JSON wire format.

The wire format is the camelCase document stored in ``Game.parameters`` and
consumed verbatim by the engine constructors::

    {"difficulty": "hard", "speedMultiplier": 1.31, "enemyCount": 6,
     "specialFeatures": ["rapid_fire", "bomb_drop"], "layoutSeed": 118734,
     "timeLimit": 94, "livesCount": 3, "bonusFrequency": 0.27,
     "customColors": {...}, "themeId": 2}

Optional keys (``timeLimit``, ``customColors``, ``themeId``) are omitted
when unset. Missing keys are filled from ``DEFAULT_PARAMETERS``; values of
the wrong type raise ``InvalidParametersError``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from daily_arcade.core.catalog import THEME_COLORS
from daily_arcade.core.enums import Difficulty, GameType


class InvalidParametersError(ValueError):
    """A stored parameters document is corrupt (bad JSON or bad values)."""


@dataclass(frozen=True)
class GameParameters:
    """Tunable knobs for one game variation. Never mutated after construction."""

    difficulty: Difficulty = Difficulty.MEDIUM
    speed_multiplier: float = 1.0
    enemy_count: int = 4
    special_features: tuple[str, ...] = ()
    layout_seed: int = 12345           # Initial seed of the engine's layout stream
    time_limit: int | None = None      # Seconds; only hard/expert variations carry one
    lives_count: int = 3
    bonus_frequency: float = 0.2
    custom_colors: Mapping[str, str] | None = None
    theme_id: int | None = None

    def has_feature(self, *names: str) -> bool:
        return any(name in self.special_features for name in names)

    def color(self, role: str, default: str) -> str:
        if self.custom_colors and role in self.custom_colors:
            return self.custom_colors[role]
        return default

    def with_seed(self, layout_seed: int) -> GameParameters:
        return replace(self, layout_seed=layout_seed)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "difficulty": self.difficulty.value,
            "speedMultiplier": self.speed_multiplier,
            "enemyCount": self.enemy_count,
            "specialFeatures": list(self.special_features),
            "layoutSeed": self.layout_seed,
            "livesCount": self.lives_count,
            "bonusFrequency": self.bonus_frequency,
        }
        if self.time_limit is not None:
            data["timeLimit"] = self.time_limit
        if self.custom_colors is not None:
            data["customColors"] = dict(self.custom_colors)
        if self.theme_id is not None:
            data["themeId"] = self.theme_id
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameParameters:
        if not isinstance(data, Mapping):
            raise InvalidParametersError("parameters must be a JSON object")
        d = DEFAULT_PARAMETERS
        try:
            difficulty = Difficulty(data.get("difficulty", d.difficulty.value))
        except ValueError as exc:
            raise InvalidParametersError(f"unknown difficulty {data.get('difficulty')!r}") from exc

        speed = _number(data, "speedMultiplier", d.speed_multiplier)
        if speed <= 0:
            raise InvalidParametersError("speedMultiplier must be positive")

        features = data.get("specialFeatures", list(d.special_features))
        if not isinstance(features, list) or not all(isinstance(f, str) for f in features):
            raise InvalidParametersError("specialFeatures must be a list of strings")

        colors = data.get("customColors")
        if colors is not None and (
            not isinstance(colors, Mapping)
            or not all(isinstance(k, str) and isinstance(v, str) for k, v in colors.items())
        ):
            raise InvalidParametersError("customColors must map roles to colour strings")

        time_limit = _optional_int(data, "timeLimit")
        if time_limit is not None and time_limit <= 0:
            time_limit = None

        return cls(
            difficulty=difficulty,
            speed_multiplier=speed,
            enemy_count=max(1, _integer(data, "enemyCount", d.enemy_count)),
            special_features=tuple(features),
            layout_seed=_integer(data, "layoutSeed", d.layout_seed),
            time_limit=time_limit,
            lives_count=max(1, _integer(data, "livesCount", d.lives_count)),
            bonus_frequency=_number(data, "bonusFrequency", d.bonus_frequency),
            custom_colors=dict(colors) if colors is not None else None,
            theme_id=_optional_int(data, "themeId"),
        )


def _number(data: Mapping[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParametersError(f"{key} must be a number, got {value!r}")
    return float(value)


def _integer(data: Mapping[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParametersError(f"{key} must be an integer, got {value!r}")
    return value


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    if data.get(key) is None:
        return None
    return _integer(data, key, 0)


DEFAULT_PARAMETERS = GameParameters(custom_colors=dict(THEME_COLORS[1]))


def parse_parameters(raw: str) -> GameParameters:
    """Parse a stored JSON parameters string."""
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise InvalidParametersError(f"parameters are not valid JSON: {exc}") from exc
    return GameParameters.from_dict(data)


def dump_parameters(params: GameParameters) -> str:
    return json.dumps(params.to_dict(), separators=(",", ":"))


@dataclass(frozen=True)
class GameVariation:
    """A concrete, named parameterisation of one game type."""

    id: int
    game_type: GameType
    name: str
    description: str
    parameters: GameParameters
    date_created: str
    seed: int = field(default=0, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "gameType": self.game_type.value,
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters.to_dict(),
            "dateCreated": self.date_created,
        }
