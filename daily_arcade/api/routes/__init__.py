"""API route modules."""

from fastapi import APIRouter

from daily_arcade.api.routes.config import router as config_router
from daily_arcade.api.routes.games import router as games_router
from daily_arcade.api.routes.play import router as play_router
from daily_arcade.api.routes.scores import router as scores_router
from daily_arcade.api.routes.users import router as users_router
from daily_arcade.api.routes.variations import router as variations_router

api_router = APIRouter(prefix="/api")
api_router.include_router(games_router, tags=["Games"])
api_router.include_router(scores_router, tags=["Scores"])
api_router.include_router(users_router, tags=["Users"])
api_router.include_router(variations_router, tags=["Variations"])
api_router.include_router(play_router, tags=["Play"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
