"""GET /api/config — expose arcade configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from daily_arcade.api.dependencies import get_session_manager
from daily_arcade.api.schemas import ArcadeConfigResponse
from daily_arcade.api.session_manager import SessionManager

router = APIRouter()


@router.get("/config", response_model=ArcadeConfigResponse)
def get_config(manager: SessionManager = Depends(get_session_manager)) -> ArcadeConfigResponse:
    cfg = manager.config
    return ArcadeConfigResponse(
        canvas_width=cfg.canvas_width,
        canvas_height=cfg.canvas_height,
        frames_per_second=cfg.frames_per_second,
        wave_delay_frames=cfg.wave_delay_frames,
        max_samples=cfg.max_samples,
        default_score_limit=cfg.default_score_limit,
        autostart=cfg.autostart,
    )
