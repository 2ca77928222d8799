from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .containers import GameConfig
from .errors import ConfigError
from .state import GameState

DEFAULT_PALETTE: Tuple[str, ...] = (
    'red', 'blue', 'green', 'yellow', 'purple', 'orange',
    'pink', 'cyan', 'brown', 'gray', 'lime', 'navy',
)


def _palette(num_colors: int, palette: Optional[Sequence[str]]) -> Tuple[str, ...]:
    names = list(palette) if palette is not None else list(DEFAULT_PALETTE)
    if len(set(names)) != len(names):
        raise ConfigError('palette contains duplicate colors')
    # Extend with numbered names when the palette runs out.
    i = len(names)
    while len(names) < num_colors:
        i += 1
        name = f'color{i}'
        if name not in names:
            names.append(name)
    return tuple(names[:num_colors])


def deal_puzzle(
    num_colors: int,
    capacity: int,
    num_empty: int = 2,
    seed: Optional[int] = None,
    palette: Optional[Sequence[str]] = None,
) -> Tuple[GameConfig, GameState]:
    """Shuffles capacity balls of each color into num_colors full containers, plus num_empty empty ones."""
    if num_colors < 1:
        raise ConfigError(f'num_colors must be at least 1, got {num_colors}')
    if capacity < 1:
        raise ConfigError(f'capacity must be at least 1, got {capacity}')
    if num_empty < 0:
        raise ConfigError(f'num_empty must be non-negative, got {num_empty}')
    rng = random.Random(seed)
    balls: List[int] = [code for code in range(1, num_colors + 1) for _ in range(capacity)]
    rng.shuffle(balls)
    full = [tuple(balls[i * capacity:(i + 1) * capacity]) for i in range(num_colors)]
    empty = [() for _ in range(num_empty)]
    cfg = GameConfig(
        num_containers=num_colors + num_empty,
        max_balls_per_container=capacity,
        colors=_palette(num_colors, palette),
    )
    return cfg, GameState(containers=tuple(full + empty))
