"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from daily_arcade.api.dependencies import get_session_manager, get_storage
from daily_arcade.api.routes.games import parse_id
from daily_arcade.api.schemas import ScoreCreate, ScoreSchema
from daily_arcade.api.session_manager import SessionManager
from daily_arcade.storage.memory import MemStorage

router = APIRouter()


@router.get("/scores/{game_id}", response_model=list[ScoreSchema])
def top_scores(
    game_id: str,
    limit: int | None = Query(None, ge=1, le=100),
    storage: MemStorage = Depends(get_storage),
    manager: SessionManager = Depends(get_session_manager),
) -> list[ScoreSchema]:
    limit = limit or manager.config.default_score_limit
    return [ScoreSchema(**s.to_dict()) for s in storage.get_top_scores(parse_id(game_id), limit)]


@router.post("/scores", response_model=ScoreSchema, status_code=201)
def submit_score(body: ScoreCreate, storage: MemStorage = Depends(get_storage)) -> ScoreSchema:
    if storage.get_game(body.game_id) is None:
        raise HTTPException(status_code=404, detail="Game not found")
    if storage.get_user(body.user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")
    score = storage.create_score(body.game_id, body.user_id, body.score, body.date)
    return ScoreSchema(**score.to_dict())
