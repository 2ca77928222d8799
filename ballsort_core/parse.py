from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .containers import Container, GameConfig
from .errors import ConfigError
from .state import GameState

# Accepted spellings for each field: the CamelCase used by existing puzzle
# files, then snake_case.
_CONFIG_KEYS = ("GameConfig", "game_config")
_STATE_KEYS = ("GameState", "game_state")
_NUM_CONTAINERS_KEYS = ("NumContainers", "num_containers")
_CAPACITY_KEYS = ("MaxNumBallsPerContainer", "max_balls_per_container")
_COLORS_KEYS = ("Colors", "colors")
_CONTAINERS_KEYS = ("Containers", "containers")


def _pick(obj: Mapping[str, Any], names: Sequence[str], what: str) -> Any:
    for name in names:
        if name in obj:
            return obj[name]
    raise ConfigError(f"missing field {names[0]!r} in {what}")


def _positive_int(value: Any, name: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {value}")
    return value


def parse_game_config(obj: Any) -> GameConfig:
    if not isinstance(obj, Mapping):
        raise ConfigError("game config must be an object")
    num_containers = _positive_int(_pick(obj, _NUM_CONTAINERS_KEYS, "game config"), "NumContainers")
    capacity = _positive_int(_pick(obj, _CAPACITY_KEYS, "game config"), "MaxNumBallsPerContainer")
    colors = _pick(obj, _COLORS_KEYS, "game config")
    if not isinstance(colors, list) or not colors:
        raise ConfigError("Colors must be a non-empty list")
    for color in colors:
        if not isinstance(color, str) or not color:
            raise ConfigError(f"color names must be non-empty strings, got {color!r}")
    if len(set(colors)) != len(colors):
        dupes = sorted({c for c in colors if colors.count(c) > 1})
        raise ConfigError(f"duplicate colors: {', '.join(dupes)}")
    return GameConfig(
        num_containers=num_containers,
        max_balls_per_container=capacity,
        colors=tuple(colors),
    )


def parse_game_state(obj: Any, cfg: GameConfig) -> GameState:
    """Resolves color names to codes and pads missing slots with empty containers."""
    if not isinstance(obj, Mapping):
        raise ConfigError("game state must be an object")
    raw_containers = _pick(obj, _CONTAINERS_KEYS, "game state")
    if not isinstance(raw_containers, list):
        raise ConfigError("Containers must be a list")
    if len(raw_containers) > cfg.num_containers:
        raise ConfigError(
            f"layout has {len(raw_containers)} containers, configuration allows {cfg.num_containers}"
        )
    codes: Dict[str, int] = {name: i + 1 for i, name in enumerate(cfg.colors)}
    containers: List[Container] = []
    for slot, raw in enumerate(raw_containers):
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise ConfigError(f"container {slot + 1} must be a list of color names")
        if len(raw) > cfg.max_balls_per_container:
            raise ConfigError(
                f"container {slot + 1} holds {len(raw)} balls, capacity is {cfg.max_balls_per_container}"
            )
        balls: List[int] = []
        for name in raw:
            if not isinstance(name, str) or name not in codes:
                raise ConfigError(f"container {slot + 1}: unknown color {name!r}")
            balls.append(codes[name])
        containers.append(tuple(balls))
    while len(containers) < cfg.num_containers:
        containers.append(())
    return GameState(containers=tuple(containers))


def parse_game_input(obj: Any) -> Tuple[GameConfig, GameState]:
    """Validates a decoded puzzle payload and converts it to the solver's model."""
    if not isinstance(obj, Mapping):
        raise ConfigError("puzzle input must be a JSON object")
    cfg = parse_game_config(_pick(obj, _CONFIG_KEYS, "puzzle input"))
    state = parse_game_state(_pick(obj, _STATE_KEYS, "puzzle input"), cfg)
    return cfg, state


def load_game_input(text: str) -> Tuple[GameConfig, GameState]:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"unable to decode puzzle input: {e}") from e
    return parse_game_input(obj)


def puzzle_to_json(cfg: GameConfig, state: Optional[GameState] = None) -> Dict[str, Any]:
    """Inverse of parse_game_input; emits the CamelCase form."""
    out: Dict[str, Any] = {
        "GameConfig": {
            "NumContainers": cfg.num_containers,
            "MaxNumBallsPerContainer": cfg.max_balls_per_container,
            "Colors": list(cfg.colors),
        },
    }
    if state is not None:
        out["GameState"] = {
            "Containers": [[cfg.color_name(b) for b in c] for c in state.containers],
        }
    return out
