"""GET /api/games/* — the daily game catalog."""

from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, Depends, HTTPException

from daily_arcade.api.dependencies import get_storage
from daily_arcade.api.schemas import GameSchema, ParametersSchema
from daily_arcade.core.parameters import InvalidParametersError
from daily_arcade.storage.memory import MemStorage
from daily_arcade.storage.models import Game

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_id(raw: str, what: str = "game") -> int:
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {what} ID") from None


def game_schema(game: Game) -> GameSchema:
    return GameSchema(**game.to_dict())


@router.get("/games/today", response_model=GameSchema)
def get_today(storage: MemStorage = Depends(get_storage)) -> GameSchema:
    today = dt.date.today().isoformat()
    return game_schema(storage.ensure_daily_game(today))


@router.get("/games", response_model=list[GameSchema])
def list_games(storage: MemStorage = Depends(get_storage)) -> list[GameSchema]:
    return [game_schema(g) for g in storage.get_games()]


@router.get("/games/date/{date}", response_model=GameSchema)
def get_game_by_date(date: str, storage: MemStorage = Depends(get_storage)) -> GameSchema:
    game = storage.get_game_by_date(date)
    if game is None:
        raise HTTPException(status_code=404, detail="No game found for this date")
    return game_schema(game)


@router.get("/games/{game_id}", response_model=GameSchema)
def get_game(game_id: str, storage: MemStorage = Depends(get_storage)) -> GameSchema:
    game = storage.get_game(parse_id(game_id))
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game_schema(game)


@router.get("/games/{game_id}/parameters", response_model=ParametersSchema, response_model_exclude_none=True)
def get_game_parameters(game_id: str, storage: MemStorage = Depends(get_storage)) -> ParametersSchema:
    game = storage.get_game(parse_id(game_id))
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    try:
        params = game.parsed_parameters()
    except InvalidParametersError as exc:
        logger.error("Game #%d has corrupt parameters: %s", game.id, exc)
        raise HTTPException(status_code=500, detail="Invalid game parameters format") from exc
    return ParametersSchema.model_validate(params.to_dict())
