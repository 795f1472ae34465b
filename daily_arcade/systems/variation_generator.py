"""Variation generator — turns a date or a seed into a reproducible GameVariation.

Numeric parameters are drawn from the layout LCG seeded with the input seed;
flavour text (name, description) is picked with the hash RNG seeded with the
resulting ``layout_seed``. Both are therefore pure functions of the seed.
"""

from __future__ import annotations

import datetime as dt
import logging
import random
from functools import cmp_to_key

from daily_arcade.core.catalog import (
    BASE_DESCRIPTIONS,
    BASE_ENEMY_COUNT,
    BASE_LIVES,
    BASE_SPEED,
    DIFFICULTIES,
    DIFFICULTY_DESCRIPTIONS,
    DIFFICULTY_TERMS,
    FEATURE_COUNT,
    FEATURE_DESCRIPTIONS,
    GAME_ROTATION,
    NAME_PREFIXES,
    NAME_SUFFIXES,
    SPECIAL_FEATURES,
    THEME_COLORS,
    THEMES,
)
from daily_arcade.core.enums import Difficulty, Domain, GameType
from daily_arcade.core.parameters import GameParameters, GameVariation
from daily_arcade.systems.rng import DeterministicRNG, LayoutRandom

logger = logging.getLogger(__name__)

MAX_VARIATION_ID = 600
RANDOM_SEED_RANGE = 1_000_000

# Entity slots inside Domain.FLAVOR
_PREFIX, _SUFFIX, _BASE_DESC = 0, 1, 2


def random_seed() -> int:
    """Non-reproducible seed for ad-hoc "generate new variation" requests."""
    return random.randrange(RANDOM_SEED_RANGE)


def date_seed(date: str) -> int:
    """Sum of the character codes of an ISO date string."""
    return sum(ord(ch) for ch in date)


def generate_random_parameters(game_type: GameType, seed: int) -> GameParameters:
    """Derive every numeric parameter from *seed* (same seed, same result)."""
    rng = LayoutRandom(seed)

    difficulty = DIFFICULTIES[rng.below(len(DIFFICULTIES))]
    enemy_count = BASE_ENEMY_COUNT[difficulty] + rng.below(3)
    speed_multiplier = BASE_SPEED[difficulty] + (rng.next() * 0.5 - 0.25)
    lives_count = BASE_LIVES[difficulty]

    # Comparator-driven shuffle: one draw per comparison, like a random sort key
    pool = list(SPECIAL_FEATURES.get(game_type, ()))
    shuffled = sorted(pool, key=cmp_to_key(lambda _a, _b: rng.next() - 0.5))
    feature_count = min(FEATURE_COUNT[difficulty], len(shuffled))
    special_features = tuple(shuffled[:feature_count])

    bonus_frequency = 0.1 + rng.next() * 0.3
    theme_id = rng.below(len(THEMES)) + 1
    custom_colors = dict(THEME_COLORS.get(theme_id, THEME_COLORS[1]))

    time_limit = None
    if difficulty in (Difficulty.HARD, Difficulty.EXPERT):
        time_limit = 60 + rng.below(60)

    return GameParameters(
        difficulty=difficulty,
        speed_multiplier=speed_multiplier,
        enemy_count=enemy_count,
        special_features=special_features,
        layout_seed=rng.state,
        time_limit=time_limit,
        lives_count=lives_count,
        bonus_frequency=bonus_frequency,
        custom_colors=custom_colors,
        theme_id=theme_id,
    )


def generate_variation_name(game_type: GameType, params: GameParameters) -> str:
    """e.g. ``"Haunted Maze: Expert Challenge"``. Cosmetic only."""
    flavor = DeterministicRNG(params.layout_seed)
    prefix = flavor.choice(Domain.FLAVOR, _PREFIX, 0, NAME_PREFIXES[game_type])
    suffix = flavor.choice(Domain.FLAVOR, _SUFFIX, 0, NAME_SUFFIXES[game_type])
    term = DIFFICULTY_TERMS[params.difficulty]
    turbo = "Turbo " if params.speed_multiplier > 1.5 else ""
    return f"{prefix} {suffix}: {term} {turbo}Challenge"


def generate_description(game_type: GameType, params: GameParameters) -> str:
    flavor = DeterministicRNG(params.layout_seed)
    base = flavor.choice(Domain.FLAVOR, _BASE_DESC, 0, BASE_DESCRIPTIONS[game_type])
    diff_desc = DIFFICULTY_DESCRIPTIONS[params.difficulty]

    special = ""
    if params.special_features:
        first = params.special_features[0]
        special = FEATURE_DESCRIPTIONS.get(
            first, f"Features {', '.join(params.special_features)}."
        )

    return f"{base}. {diff_desc} {special} Speed: {params.speed_multiplier:.1f}x."


def generate_game_variation(
    variation_id: int,
    game_type: GameType,
    date: str,
    seed: int | None = None,
) -> GameVariation:
    """Compose parameters and flavour text into a GameVariation."""
    if seed is None:
        seed = random_seed()
        logger.info("No seed supplied for %s variation #%d — using random seed %d",
                    game_type.value, variation_id, seed)

    params = generate_random_parameters(game_type, seed)
    return GameVariation(
        id=variation_id,
        game_type=game_type,
        name=generate_variation_name(game_type, params),
        description=generate_description(game_type, params),
        parameters=params,
        date_created=date,
        seed=seed,
    )


def generate_daily_game(date: str | dt.date) -> GameVariation:
    """Same calendar date, same game type, id and parameters."""
    if isinstance(date, dt.date):
        date = date.isoformat()
    seed = date_seed(date)
    game_type = GAME_ROTATION[seed % len(GAME_ROTATION)]
    variation = generate_game_variation(seed % MAX_VARIATION_ID, game_type, date, seed)
    logger.debug("Daily game for %s: %s '%s' (seed %d)", date, game_type.value, variation.name, seed)
    return variation


def generate_multiple_variations(count: int, start: dt.date | None = None) -> list[GameVariation]:
    """Catalog of *count* variations: types rotate, seeds and day offsets follow the index."""
    start = start or dt.date.today()
    variations: list[GameVariation] = []
    for i in range(max(0, count)):
        game_type = GAME_ROTATION[i % len(GAME_ROTATION)]
        date = (start + dt.timedelta(days=i)).isoformat()
        variations.append(generate_game_variation(i + 1, game_type, date, i))
    return variations
