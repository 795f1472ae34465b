"""Static catalog data: themes, feature pools, difficulty tables and flavour text.

Everything here is plain data; the variation generator and the engines read
from it and nothing writes to it.
"""

from __future__ import annotations

from daily_arcade.core.enums import Difficulty, GameType

# Daily rotation order (index = date seed mod 3)
GAME_ROTATION: tuple[GameType, ...] = (GameType.PACMAN, GameType.SPACE_INVADERS, GameType.FROGGER)

DIFFICULTIES: tuple[Difficulty, ...] = (
    Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD, Difficulty.EXPERT,
)

# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------

THEMES: dict[int, str] = {1: "Classic", 2: "Neon", 3: "Retro", 4: "Dark", 5: "Pastel"}

THEME_COLORS: dict[int, dict[str, str]] = {
    1: {"background": "#000000", "player": "#FFFF00", "enemy": "#FF0000", "item": "#00FFFF"},
    2: {"background": "#120458", "player": "#F706CF", "enemy": "#06F725", "item": "#06D8F7"},
    3: {"background": "#382800", "player": "#B86F00", "enemy": "#4F6228", "item": "#CFAD00"},
    4: {"background": "#0A0A0A", "player": "#A6A6A6", "enemy": "#4D4D4D", "item": "#D9D9D9"},
    5: {"background": "#F0E6F2", "player": "#A6D8D4", "enemy": "#F2BAC9", "item": "#BCD8A6"},
}

# ---------------------------------------------------------------------------
# Special features (vocabulary is per game type)
# ---------------------------------------------------------------------------

SPECIAL_FEATURES: dict[GameType, tuple[str, ...]] = {
    GameType.PACMAN: (
        "ghost_frenzy", "maze_rotation", "invisible_walls", "reverse_controls",
        "double_dots", "super_pellets", "teleporting_ghosts", "fog_of_war",
        "moving_walls", "bonus_fruits", "ghost_allies", "maze_shuffle",
    ),
    GameType.SPACE_INVADERS: (
        "multi_shot", "shield_boost", "rapid_fire", "enemy_missiles",
        "asteroid_field", "boss_battle", "bomb_drop", "alien_swarm",
        "bullet_time", "ship_upgrade", "invincibility", "bullet_reflection",
    ),
    GameType.FROGGER: (
        "double_speed", "time_bonus", "moving_logs", "water_current",
        "flying_birds", "bonus_insects", "shrinking_platforms", "slippery_logs",
        "predator_fish", "fog_effect", "falling_objects", "changing_tides",
    ),
}

# ---------------------------------------------------------------------------
# Difficulty tables
# ---------------------------------------------------------------------------

BASE_ENEMY_COUNT: dict[Difficulty, int] = {
    Difficulty.EASY: 3, Difficulty.MEDIUM: 4, Difficulty.HARD: 5, Difficulty.EXPERT: 6,
}
BASE_SPEED: dict[Difficulty, float] = {
    Difficulty.EASY: 0.8, Difficulty.MEDIUM: 1.0, Difficulty.HARD: 1.2, Difficulty.EXPERT: 1.5,
}
BASE_LIVES: dict[Difficulty, int] = {
    Difficulty.EASY: 5, Difficulty.MEDIUM: 4, Difficulty.HARD: 3, Difficulty.EXPERT: 2,
}
FEATURE_COUNT: dict[Difficulty, int] = {
    Difficulty.EASY: 1, Difficulty.MEDIUM: 2, Difficulty.HARD: 2, Difficulty.EXPERT: 3,
}

# In-engine speed scaling (same numbers as BASE_SPEED, used by every engine)
DIFFICULTY_MULTIPLIER: dict[Difficulty, float] = dict(BASE_SPEED)

# ---------------------------------------------------------------------------
# Flavour text
# ---------------------------------------------------------------------------

NAME_PREFIXES: dict[GameType, tuple[str, ...]] = {
    GameType.PACMAN: ("Haunted", "Frenzied", "Labyrinthine", "Phantom", "Spectral", "Maze"),
    GameType.SPACE_INVADERS: ("Galactic", "Cosmic", "Orbital", "Stellar", "Asteroid", "Alien"),
    GameType.FROGGER: ("Rushing", "Raging", "Treacherous", "Flooded", "Traffic", "Highway"),
}

NAME_SUFFIXES: dict[GameType, tuple[str, ...]] = {
    GameType.PACMAN: ("Chase", "Maze", "Frenzy", "Feast", "Hunt", "Escape"),
    GameType.SPACE_INVADERS: ("Attack", "Defense", "Invasion", "Warfare", "Assault", "Battle"),
    GameType.FROGGER: ("Crossing", "Rush", "Hop", "River", "Journey", "Challenge"),
}

DIFFICULTY_TERMS: dict[Difficulty, str] = {
    Difficulty.EASY: "Novice",
    Difficulty.MEDIUM: "Adept",
    Difficulty.HARD: "Expert",
    Difficulty.EXPERT: "Master",
}

BASE_DESCRIPTIONS: dict[GameType, tuple[str, ...]] = {
    GameType.PACMAN: (
        "Navigate through a maze while avoiding ghosts",
        "Eat all dots while evading colorful ghosts",
        "Collect power pellets to turn the tables on the ghosts",
    ),
    GameType.SPACE_INVADERS: (
        "Defend Earth from waves of descending alien invaders",
        "Shoot down alien ships before they reach the bottom",
        "Protect your bases while eliminating the alien threat",
    ),
    GameType.FROGGER: (
        "Guide your frog safely across busy roads and hazardous rivers",
        "Hop through traffic and ride logs to reach safety",
        "Navigate through vehicles and water hazards to reach your home",
    ),
}

DIFFICULTY_DESCRIPTIONS: dict[Difficulty, str] = {
    Difficulty.EASY: "A relaxed challenge suitable for beginners.",
    Difficulty.MEDIUM: "A balanced challenge for casual players.",
    Difficulty.HARD: "A demanding challenge that will test your skills.",
    Difficulty.EXPERT: "An extreme challenge for the most skilled players.",
}

FEATURE_DESCRIPTIONS: dict[str, str] = {
    "ghost_frenzy": "Ghosts move unpredictably and change directions frequently.",
    "maze_rotation": "The maze periodically rotates, challenging your orientation.",
    "invisible_walls": "Some walls appear and disappear, changing the maze layout.",
    "reverse_controls": "Controls are occasionally reversed, testing your adaptation skills.",
    "double_dots": "Every dot is worth double points.",
    "super_pellets": "Power pellets keep the ghosts frightened twice as long.",
    "multi_shot": "Your ship can fire multiple shots simultaneously.",
    "shield_boost": "Occasional shield power-ups provide temporary invulnerability.",
    "rapid_fire": "Increased firing rate for your space cannon.",
    "enemy_missiles": "Enemies fire tracking missiles that home in on your position.",
    "double_speed": "Your frog moves twice as fast, but requires precise control.",
    "time_bonus": "Collect clock icons for extra time.",
    "moving_logs": "Logs shift positions and change direction unexpectedly.",
    "water_current": "River currents push your frog in different directions.",
}

# ---------------------------------------------------------------------------
# Host-facing catalog entries
# ---------------------------------------------------------------------------

GAME_ICONS: dict[GameType, str] = {
    GameType.PACMAN: "gamepad",
    GameType.SPACE_INVADERS: "rocket",
    GameType.FROGGER: "frog",
}

GAME_INSTRUCTIONS: dict[GameType, str] = {
    GameType.PACMAN: "Use arrow keys to move. Eat dots for points and power pellets to hunt ghosts!",
    GameType.SPACE_INVADERS: "Use left/right to move and spacebar to shoot. Avoid enemy shots!",
    GameType.FROGGER: "Use arrow keys to move. Avoid traffic and use logs to cross the river.",
}

DEFAULT_INSTRUCTIONS = "Use arrow keys to control the game."
