"""FastAPI dependency injection — provides the storage and session singletons."""

from __future__ import annotations

from daily_arcade.api.session_manager import SessionManager
from daily_arcade.storage.memory import MemStorage

_storage: MemStorage | None = None
_session_manager: SessionManager | None = None


def set_storage(storage: MemStorage) -> None:
    global _storage
    _storage = storage


def get_storage() -> MemStorage:
    if _storage is None:
        raise RuntimeError("Storage not initialized — server not started correctly.")
    return _storage


def set_session_manager(manager: SessionManager) -> None:
    global _session_manager
    _session_manager = manager


def get_session_manager() -> SessionManager:
    if _session_manager is None:
        raise RuntimeError("SessionManager not initialized — server not started correctly.")
    return _session_manager
