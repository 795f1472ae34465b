#!/usr/bin/env python3
"""Frame-loop profiler.

Usage:
    python scripts/profile_frame_loop.py --type pacman --seed 42 --frames 3000
    python scripts/profile_frame_loop.py --date 2024-01-01 --cprofile frames.prof
    python scripts/profile_frame_loop.py --type frogger --frames 5000 --memory

Reports:
    - Per-frame timing statistics (min, max, mean, p50, p95, p99)
    - Update vs. render breakdown
    - Draw commands per frame
    - Throughput (frames/sec) and headroom against the configured frame rate
    - Optional: cProfile dump for flame graph generation
    - Optional: tracemalloc memory snapshot
"""

from __future__ import annotations

import argparse
import cProfile
import datetime as dt
import io
import os
import pstats
import statistics
import sys
import time
import tracemalloc

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from daily_arcade.config import ArcadeConfig
from daily_arcade.core.enums import GameType
from daily_arcade.engine.autopilot import Autopilot
from daily_arcade.engine.factory import create_engine
from daily_arcade.engine.input import InputSnapshot
from daily_arcade.rendering.surface import DrawList
from daily_arcade.systems.variation_generator import generate_daily_game, generate_random_parameters


class _TimingHost:
    """Bare EngineHost: keeps score and runs deferred tasks, nothing else."""

    def __init__(self) -> None:
        self.frame = 0
        self.score = 0
        self.over = False
        self._tasks: list = []

    def update_score(self, delta: int) -> None:
        self.score += delta

    def game_over(self, outcome) -> None:
        self.over = True

    def schedule(self, delay_frames, callback, name=""):
        self._tasks.append((self.frame + max(1, delay_frames), callback))

    def emit(self, category: str, message: str) -> None:
        pass

    def run_due(self) -> None:
        due = [t for t in self._tasks if t[0] <= self.frame]
        self._tasks = [t for t in self._tasks if t[0] > self.frame]
        for _, callback in due:
            callback()


def _run_frames(cfg: ArcadeConfig, game_type: GameType, params, num_frames: int, pilot_seed: int) -> dict:
    """Drive one engine directly and collect per-frame timing data."""
    engine = create_engine(game_type, params, cfg)
    surface = DrawList(cfg.canvas_width, cfg.canvas_height)
    pilot = Autopilot(pilot_seed)
    host = _TimingHost()

    frame_times: list[float] = []
    phase_times: list[tuple[float, float]] = []
    command_counts: list[int] = []
    episodes = 1

    for _ in range(num_frames):
        host.frame += 1
        t_start = time.perf_counter()
        host.run_due()
        engine.update(InputSnapshot(pilot.choose(host.frame)), host)
        t1 = time.perf_counter()
        engine.render(surface)
        t2 = time.perf_counter()

        frame_times.append(t2 - t_start)
        phase_times.append((t1 - t_start, t2 - t1))
        command_counts.append(len(surface))

        # Keep measuring across episodes so short games still give long samples
        if host.over:
            engine.reset()
            host.over = False
            episodes += 1

    return {
        "frame_times": frame_times,
        "phase_times": phase_times,
        "command_counts": command_counts,
        "episodes": episodes,
        "score": host.score,
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float, fps: int) -> None:
    """Print a formatted performance report."""
    frame_times = data["frame_times"]
    phase_times = data["phase_times"]
    command_counts = data["command_counts"]
    num_frames = len(frame_times)

    if num_frames == 0:
        print("No frames executed.")
        return

    budget_ms = 1000.0 / fps
    print("\n" + "=" * 70)
    print("  FRAME LOOP PERFORMANCE REPORT")
    print("=" * 70)

    # --- Overview ---
    print(f"\n  Frames executed:   {num_frames}")
    print(f"  Episodes:          {data['episodes']}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_frames / wall_time:.1f} frames/sec")
    print(f"  Avg frame time:    {statistics.mean(frame_times) * 1000:.3f}ms "
          f"({statistics.mean(frame_times) * 1000 / budget_ms * 100:.1f}% of {budget_ms:.2f}ms budget)")
    print(f"  Draw commands:     avg {statistics.mean(command_counts):.0f}, peak {max(command_counts)}")

    # --- Frame time distribution ---
    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(frame_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(frame_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(frame_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(frame_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(frame_times) * 1000:>10.3f}")
    print(f"  {'StdDev':<16} {statistics.stdev(frame_times) * 1000:>10.3f}" if num_frames > 1 else "")

    # --- Phase breakdown ---
    update = [p[0] for p in phase_times]
    render = [p[1] for p in phase_times]
    total_sum = sum(frame_times)

    print(f"\n  {'Phase':<16} {'Avg (ms)':>10} {'P95 (ms)':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10} {'-' * 10}")
    for name, times in [("Update", update), ("Render", render)]:
        avg_ms = statistics.mean(times) * 1000
        p95_ms = _percentile(times, 95) * 1000
        pct = (sum(times) / total_sum * 100) if total_sum > 0 else 0
        print(f"  {name:<16} {avg_ms:>10.3f} {p95_ms:>10.3f} {pct:>9.1f}%")

    # --- Slowest frames ---
    print("\n  Top 5 slowest frames:")
    indexed = sorted(enumerate(frame_times), key=lambda x: x[1], reverse=True)[:5]
    for idx, t in indexed:
        print(f"    Frame {idx + 1:>6}: {t * 1000:.3f}ms  ({command_counts[idx]} draw commands)")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile one game engine under the autopilot")
    parser.add_argument("--type", type=str, default=None, choices=[t.value for t in GameType],
                        help="Ad-hoc game type (default: the daily game)")
    parser.add_argument("--seed", type=int, default=42, help="Variation seed for --type")
    parser.add_argument("--date", type=str, default=None, help="ISO date of the daily game")
    parser.add_argument("--frames", type=int, default=3000, help="Number of frames to run")
    parser.add_argument("--autopilot-seed", type=int, default=7)
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    parser.add_argument("--memory", action="store_true", help="Enable tracemalloc memory profiling")
    args = parser.parse_args()

    cfg = ArcadeConfig()
    if args.type is not None:
        game_type = GameType(args.type)
        params = generate_random_parameters(game_type, args.seed)
        label = f"{game_type.value} seed={args.seed}"
    else:
        variation = generate_daily_game(args.date or dt.date.today().isoformat())
        game_type, params = variation.game_type, variation.parameters
        label = f"{variation.name} ({variation.date_created})"

    print(f"Profiling: {args.frames} frames, {label}, difficulty={params.difficulty.value}, "
          f"canvas={cfg.canvas_width}x{cfg.canvas_height}")

    # --- Optional: memory tracking ---
    if args.memory:
        tracemalloc.start()

    # --- Optional: cProfile ---
    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_frames(cfg, game_type, params, args.frames, args.autopilot_seed)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time, cfg.frames_per_second)

    # --- cProfile output ---
    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print("\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())

    # --- Memory output ---
    if args.memory:
        snapshot = tracemalloc.take_snapshot()
        print("\n  Top 15 memory allocations by size:")
        print(f"  {'File:Line':<60} {'Size':>10}")
        print(f"  {'-' * 60} {'-' * 10}")
        for stat in snapshot.statistics("lineno")[:15]:
            print(f"  {str(stat.traceback):<60} {stat.size / 1024:>8.1f} KB")

        current, peak = tracemalloc.get_traced_memory()
        print(f"\n  Current memory: {current / 1024:.1f} KB")
        print(f"  Peak memory:    {peak / 1024:.1f} KB")
        tracemalloc.stop()


if __name__ == "__main__":
    main()
