"""Play-session endpoints — load a game, drive its frame loop, feed input."""

from __future__ import annotations

import logging
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from daily_arcade.api.dependencies import get_session_manager, get_storage
from daily_arcade.api.schemas import (
    ControlResponse,
    EventSchema,
    EventsResponse,
    FrameResponse,
    GestureRequest,
    InputRequest,
    InputResponse,
    LoadRequest,
    ParametersSchema,
    SessionStateSchema,
)
from daily_arcade.api.session_manager import NoSessionError, SessionManager
from daily_arcade.core.parameters import InvalidParametersError
from daily_arcade.engine.frame_loop import FrameLoop, LoopStateError
from daily_arcade.engine.input import Gesture
from daily_arcade.storage.memory import MemStorage
from daily_arcade.systems.variation_generator import generate_random_parameters, random_seed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/play")


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


def _loop(manager: SessionManager) -> FrameLoop:
    try:
        return manager.get_loop()
    except NoSessionError:
        raise HTTPException(status_code=503, detail="No game loaded. POST /api/play/load first.") from None


def _state(manager: SessionManager) -> SessionStateSchema:
    loop = _loop(manager)
    snap = loop.get_snapshot()
    info = manager.info
    return SessionStateSchema(
        game_type=snap.game_type,
        game_id=info.game_id,
        status=snap.status.name.lower(),
        frame=snap.frame,
        score=snap.score,
        outcome=snap.outcome.name.lower() if snap.outcome is not None else None,
        episode=snap.episode,
        stats=snap.stats,
        parameters=ParametersSchema.model_validate(info.parameters.to_dict()),
    )


@router.post("/load", response_model=SessionStateSchema)
def load(
    body: LoadRequest,
    manager: SessionManager = Depends(get_session_manager),
    storage: MemStorage = Depends(get_storage),
) -> SessionStateSchema:
    if body.game_id is not None:
        game = storage.get_game(body.game_id)
        if game is None:
            raise HTTPException(status_code=404, detail="Game not found")
        try:
            params = game.parsed_parameters()
        except InvalidParametersError as exc:
            raise HTTPException(status_code=500, detail="Invalid game parameters format") from exc
        manager.load(game.type, params, game_id=game.id)
    else:
        seed = body.seed if body.seed is not None else random_seed()
        manager.load(body.game_type, generate_random_parameters(body.game_type, seed))
    return _state(manager)


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    loop = _loop(manager)
    try:
        match action:
            case ControlAction.start:
                loop.start()
                message = "Game started."
            case ControlAction.pause:
                loop.pause()
                message = "Game paused."
            case ControlAction.resume:
                loop.resume()
                message = "Game resumed."
            case ControlAction.step:
                loop.step()
                message = "Single frame executed."
            case ControlAction.reset:
                loop.reset()
                message = "Game reset."
    except LoopStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ControlResponse(status="ok", message=message, frame=loop.frame)


@router.post("/input", response_model=InputResponse)
def key_input(body: InputRequest, manager: SessionManager = Depends(get_session_manager)) -> InputResponse:
    return InputResponse(accepted=_loop(manager).adapter.handle_key(body.code, body.pressed))


@router.post("/gesture", response_model=InputResponse)
def gesture_input(body: GestureRequest, manager: SessionManager = Depends(get_session_manager)) -> InputResponse:
    gesture = Gesture(kind=body.kind, x=body.x, y=body.y, dx=body.dx, dy=body.dy)
    return InputResponse(accepted=_loop(manager).adapter.gesture(gesture))


@router.get("/state", response_model=SessionStateSchema)
def state(manager: SessionManager = Depends(get_session_manager)) -> SessionStateSchema:
    return _state(manager)


@router.get("/frame", response_model=FrameResponse)
def frame(manager: SessionManager = Depends(get_session_manager)) -> FrameResponse:
    snap = _loop(manager).get_snapshot()
    cfg = manager.config
    return FrameResponse(
        frame=snap.frame, width=cfg.canvas_width, height=cfg.canvas_height, commands=list(snap.commands),
    )


@router.get("/events", response_model=EventsResponse)
def events(
    since: int = Query(0, ge=0, description="Only events from this frame on"),
    manager: SessionManager = Depends(get_session_manager),
) -> EventsResponse:
    loop = _loop(manager)
    return EventsResponse(
        events=[EventSchema(**e.to_dict()) for e in manager.event_log.since_frame(since)],
        frame=loop.frame,
    )
