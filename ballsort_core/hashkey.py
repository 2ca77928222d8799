from __future__ import annotations

from typing import List, Sequence

from .containers import Container, GameConfig

KEY_DELIMITER = ","


def container_canonical_value(container: Container, cfg: GameConfig) -> int:
    """Reads the container as a base-(N+1) number, N being the number of colors.

    The bottom ball is the unit's digit and a missing ball is digit 0, so an
    empty container is 0. Color codes are 1..N, which keeps the encoding
    injective for containers of any fill level.
    """
    value = 0
    multiplier = 1
    base = cfg.num_colors + 1
    for ball in container:
        value += multiplier * ball
        multiplier *= base
    return value


def container_from_canonical_value(value: int, max_balls_per_container: int, num_colors: int) -> Container:
    """Inverse of container_canonical_value."""
    if value < 0:
        raise ValueError(f"canonical value must be non-negative, got {value}")
    base = num_colors + 1
    balls: List[int] = []
    while value > 0:
        value, digit = divmod(value, base)
        balls.append(digit)
    if len(balls) > max_balls_per_container:
        raise ValueError(f"canonical value encodes {len(balls)} balls, capacity is {max_balls_per_container}")
    return tuple(balls)


def canonical_key(containers: Sequence[Container], cfg: GameConfig) -> str:
    """Slot-order independent key: sorted container values joined as decimal strings."""
    values = sorted(container_canonical_value(c, cfg) for c in containers)
    return KEY_DELIMITER.join(str(v) for v in values)


def containers_from_key(key: str, cfg: GameConfig) -> List[Container]:
    """Decodes a canonical key back into containers, in ascending value order."""
    if not key:
        return []
    return [
        container_from_canonical_value(int(tok), cfg.max_balls_per_container, cfg.num_colors)
        for tok in key.split(KEY_DELIMITER)
    ]
