"""Pydantic request/response models for the REST API.

JSON keys are camelCase (``gameId``, ``speedMultiplier``); Python
attributes stay snake_case and either spelling is accepted on input.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from daily_arcade.core.enums import Difficulty, GameType, GestureKind


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


# --- Catalog ---

class GameSchema(CamelModel):
    id: int
    name: str
    type: GameType
    description: str
    instructions: str
    date: str
    icon: str
    parameters: str = "{}"
    variation_id: int = 0


class ParametersSchema(CamelModel):
    difficulty: Difficulty
    speed_multiplier: float
    enemy_count: int
    special_features: list[str] = Field(default_factory=list)
    layout_seed: int
    time_limit: int | None = None
    lives_count: int
    bonus_frequency: float
    custom_colors: dict[str, str] | None = None
    theme_id: int | None = None


class VariationSchema(CamelModel):
    id: int
    game_type: GameType
    name: str
    description: str
    parameters: ParametersSchema
    date_created: str


# --- Scores & users ---

class ScoreSchema(CamelModel):
    id: int
    game_id: int
    user_id: int
    score: int
    date: str
    timestamp: dt.datetime


class ScoreCreate(CamelModel):
    game_id: int
    user_id: int
    score: int = Field(ge=0)
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")


class GuestUserSchema(CamelModel):
    id: int
    username: str


# --- Config ---

class ArcadeConfigResponse(CamelModel):
    canvas_width: int
    canvas_height: int
    frames_per_second: int
    wave_delay_frames: int
    max_samples: int
    default_score_limit: int
    autostart: bool


# --- Play session ---

class LoadRequest(CamelModel):
    """Either a stored ``gameId`` or an ad-hoc ``gameType`` (+ optional ``seed``)."""

    game_id: int | None = None
    game_type: GameType | None = None
    seed: int | None = None

    @model_validator(mode="after")
    def _one_source(self) -> LoadRequest:
        if (self.game_id is None) == (self.game_type is None):
            raise ValueError("provide exactly one of gameId or gameType")
        return self


class InputRequest(CamelModel):
    code: str
    pressed: bool = True


class GestureRequest(CamelModel):
    kind: GestureKind
    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0


class InputResponse(CamelModel):
    accepted: bool


class ControlResponse(CamelModel):
    status: str
    message: str
    frame: int


class SessionStateSchema(CamelModel):
    game_type: GameType
    game_id: int | None = None
    status: str
    frame: int
    score: int
    outcome: str | None = None
    episode: int
    stats: dict[str, Any] = Field(default_factory=dict)
    parameters: ParametersSchema


class FrameResponse(CamelModel):
    frame: int
    width: int
    height: int
    commands: list[dict[str, Any]]


class EventSchema(CamelModel):
    frame: int
    category: str
    message: str


class EventsResponse(CamelModel):
    events: list[EventSchema]
    frame: int
