from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

Color = int  # 1..N, see GameConfig.colors
Container = Tuple[Color, ...]  # index 0 is the bottom ball


@dataclass(frozen=True)
class GameConfig:
    """Static puzzle configuration: slot count, capacity and the ordered color names."""
    num_containers: int
    max_balls_per_container: int
    colors: Tuple[str, ...]

    @property
    def num_colors(self) -> int:
        return len(self.colors)

    def color_name(self, code: Color) -> str:
        """Maps a 1-based color code back to its name."""
        return self.colors[code - 1]


def num_balls(container: Container) -> int:
    return len(container)


def is_same_color(container: Container) -> bool:
    """True when every ball shares one color. An empty container counts as same-color."""
    if not container:
        return True
    first = container[0]
    return all(ball == first for ball in container)


def top_color(container: Container) -> Optional[Color]:
    return container[-1] if container else None


def top_run_length(container: Container) -> int:
    """Length of the contiguous run of same-colored balls at the top of the container."""
    if not container:
        return 0
    top = container[-1]
    run = 1
    for ball in reversed(container[:-1]):
        if ball != top:
            break
        run += 1
    return run


def free_space(container: Container, cfg: GameConfig) -> int:
    return cfg.max_balls_per_container - len(container)


def is_full(container: Container, cfg: GameConfig) -> bool:
    return len(container) >= cfg.max_balls_per_container


def total_balls(containers: Iterable[Container]) -> int:
    return sum(len(c) for c in containers)


def color_counts(containers: Iterable[Container]) -> dict:
    """Per-color ball counts across all containers."""
    counts: dict = {}
    for container in containers:
        for ball in container:
            counts[ball] = counts.get(ball, 0) + 1
    return counts
