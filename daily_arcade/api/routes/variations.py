"""Ad-hoc variation generation and the sample catalog."""

from __future__ import annotations

import datetime as dt
import random

from fastapi import APIRouter, Depends, Query

from daily_arcade.api.dependencies import get_session_manager
from daily_arcade.api.schemas import VariationSchema
from daily_arcade.api.session_manager import SessionManager
from daily_arcade.core.enums import GameType
from daily_arcade.core.parameters import GameVariation
from daily_arcade.systems.variation_generator import generate_game_variation, generate_multiple_variations

router = APIRouter()

ADHOC_ID_RANGE = 1000


def variation_schema(variation: GameVariation) -> VariationSchema:
    return VariationSchema.model_validate(variation.to_dict())


@router.get("/variations/generate", response_model=VariationSchema, response_model_exclude_none=True)
def generate(
    type: GameType = Query(GameType.PACMAN, description="Game type"),
    seed: int | None = Query(None, description="Omit for a random variation"),
) -> VariationSchema:
    today = dt.date.today().isoformat()
    variation = generate_game_variation(random.randrange(ADHOC_ID_RANGE), type, today, seed)
    return variation_schema(variation)


@router.get("/variations/samples", response_model=list[VariationSchema], response_model_exclude_none=True)
def samples(
    count: int = Query(10),
    manager: SessionManager = Depends(get_session_manager),
) -> list[VariationSchema]:
    count = min(max(count, 1), manager.config.max_samples)
    return [variation_schema(v) for v in generate_multiple_variations(count)]
