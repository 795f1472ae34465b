"""POST /api/users/guest — throwaway identities for score submission."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from daily_arcade.api.dependencies import get_storage
from daily_arcade.api.schemas import GuestUserSchema
from daily_arcade.storage.memory import MemStorage

router = APIRouter()


@router.post("/users/guest", response_model=GuestUserSchema, status_code=201)
def create_guest(storage: MemStorage = Depends(get_storage)) -> GuestUserSchema:
    user = storage.create_guest_user()
    return GuestUserSchema(id=user.id, username=user.username)
