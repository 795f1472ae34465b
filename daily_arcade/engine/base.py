"""Engine contract — what a concrete game implements and what drives it.

Concrete engines are independent classes that satisfy ``GameEngine``
structurally; they share no base class. Lifecycle, scoring, deferred
work and game-over bookkeeping live in the ``EngineHost`` that calls
them (``FrameLoop``), so an engine only ever advances one fixed step
and draws its current state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from daily_arcade.core.enums import GameOutcome, GameType
    from daily_arcade.core.parameters import GameParameters
    from daily_arcade.engine.input import InputSnapshot
    from daily_arcade.rendering.surface import Surface


@dataclass(slots=True, eq=False)
class DeferredTask:
    """A callback due after a number of frames; see ``EngineHost.schedule``."""

    name: str
    due_frame: int
    callback: Callable[[], None] = field(repr=False)
    cancelled: bool = False
    done: bool = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self) -> None:
        self.cancelled = True


class EngineHost(Protocol):
    """Services the frame loop offers to the engine it drives."""

    @property
    def frame(self) -> int:
        """1-based number of the frame being executed."""
        ...

    def update_score(self, delta: int) -> None: ...

    def game_over(self, outcome: GameOutcome) -> None:
        """End the episode. Later calls in the same episode are ignored."""
        ...

    def schedule(self, delay_frames: int, callback: Callable[[], None], name: str = "") -> DeferredTask:
        """Run *callback* at the start of a frame *delay_frames* from now.

        Pending tasks are dropped on reset, game over and cleanup.
        """
        ...

    def emit(self, category: str, message: str) -> None: ...


class GameEngine(Protocol):
    game_type: GameType
    parameters: GameParameters

    def update(self, inputs: InputSnapshot, host: EngineHost) -> None:
        """Advance exactly one fixed step."""
        ...

    def render(self, surface: Surface) -> None:
        """Draw the current state. Must not mutate game state."""
        ...

    def reset(self) -> None:
        """Rebuild every entity from ``parameters.layout_seed``."""
        ...

    def stats(self) -> dict[str, Any]: ...
