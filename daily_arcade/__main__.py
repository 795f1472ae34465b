"""Entry point: ``python -m daily_arcade``.

Supports four modes:
  - ``python -m daily_arcade``          → Launch the FastAPI server
  - ``python -m daily_arcade cli``      → Headless autopilot run with a replay file
  - ``python -m daily_arcade play``     → Play in a local pygame window
  - ``python -m daily_arcade daily``    → Print a date's variation as JSON
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

GAME_TYPES = ["pacman", "space-invaders", "frogger"]


def _add_game_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", type=str, default=None, help="ISO date of the daily game")
    parser.add_argument("--type", type=str, default=None, choices=GAME_TYPES, help="Ad-hoc game type")
    parser.add_argument("--seed", type=int, default=None, help="Ad-hoc seed (random if omitted)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daily Arcade")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--fps", type=int, default=60)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a game headless under the autopilot")
    _add_game_args(cli)
    cli.add_argument("--frames", type=int, default=1800)
    cli.add_argument("--autopilot-seed", type=int, default=7)
    cli.add_argument("--replay", type=str, default="replay.json")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Local window ---
    play = sub.add_parser("play", help="Play in a pygame window")
    _add_game_args(play)
    play.add_argument("--fps", type=int, default=60)
    play.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Daily variation dump ---
    daily = sub.add_parser("daily", help="Print the daily game for a date as JSON")
    daily.add_argument("--date", type=str, default=None)

    return parser


def _resolve_game(args: argparse.Namespace):
    """Return ``(game_type, parameters, label)`` for the daily or ad-hoc choice in *args*."""
    import datetime as dt

    from daily_arcade.core.enums import GameType
    from daily_arcade.systems.variation_generator import (
        generate_daily_game,
        generate_random_parameters,
        random_seed,
    )

    if args.type is not None:
        game_type = GameType(args.type)
        seed = args.seed if args.seed is not None else random_seed()
        return game_type, generate_random_parameters(game_type, seed), f"{game_type.value} seed {seed}"

    variation = generate_daily_game(args.date or dt.date.today().isoformat())
    return variation.game_type, variation.parameters, variation.name


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from daily_arcade.api.app import create_app
    from daily_arcade.config import ArcadeConfig

    config = ArcadeConfig(frames_per_second=args.fps, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from daily_arcade.config import ArcadeConfig
    from daily_arcade.engine.autopilot import Autopilot
    from daily_arcade.engine.factory import create_engine
    from daily_arcade.engine.frame_loop import FrameLoop
    from daily_arcade.engine.scheduler import ManualScheduler
    from daily_arcade.utils.logging import setup_logging
    from daily_arcade.utils.replay import ReplayRecorder

    config = ArcadeConfig(replay_file=args.replay, log_level=args.log_level)
    setup_logging(config.log_level)

    game_type, params, label = _resolve_game(args)
    logger.info("Running %s for up to %d frames", label, args.frames)

    scheduler = ManualScheduler()
    recorder = ReplayRecorder(config.replay_file, game_type, params, (config.canvas_width, config.canvas_height))
    loop = FrameLoop(create_engine(game_type, params, config), scheduler, config, recorder=recorder)
    pilot = Autopilot(args.autopilot_seed)

    loop.start()
    try:
        while loop.frame < args.frames and scheduler.pending:
            pilot.apply(loop.input_state, loop.frame + 1)
            scheduler.pump()
    finally:
        loop.cleanup()
        recorder.flush()

    outcome = loop.outcome.name.lower() if loop.outcome is not None else "unfinished"
    logger.info("Done after %d frames: score %d (%s)", loop.frame, loop.score, outcome)


def _run_play(args: argparse.Namespace) -> None:
    from daily_arcade.config import ArcadeConfig
    from daily_arcade.engine.factory import create_engine
    from daily_arcade.engine.frame_loop import FrameLoop
    from daily_arcade.engine.scheduler import ManualScheduler
    from daily_arcade.rendering.pygame_surface import open_window, run_window
    from daily_arcade.utils.logging import setup_logging

    config = ArcadeConfig(frames_per_second=args.fps, log_level=args.log_level)
    setup_logging(config.log_level)

    game_type, params, label = _resolve_game(args)
    surface = open_window(config, label)
    scheduler = ManualScheduler()
    loop = FrameLoop(create_engine(game_type, params, config), scheduler, config, surface=surface)
    run_window(loop, scheduler, surface, config)


def _run_daily(args: argparse.Namespace) -> None:
    import datetime as dt
    import json

    from daily_arcade.systems.variation_generator import generate_daily_game

    variation = generate_daily_game(args.date or dt.date.today().isoformat())
    print(json.dumps(variation.to_dict(), indent=2))


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)
    elif args.command == "play":
        _run_play(args)
    elif args.command == "daily":
        _run_daily(args)


if __name__ == "__main__":
    main()
