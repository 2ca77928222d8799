from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from .containers import Container, GameConfig, is_full, is_same_color, num_balls
from .hashkey import canonical_key


@dataclass(frozen=True)
class GameState:
    """The containers of a puzzle, one per slot. Slot order carries no meaning for the game."""
    containers: Tuple[Container, ...]
    # Filled by canonical_form(); never copied into clones.
    _canonical: Optional[str] = field(default=None, init=False, repr=False, compare=False, hash=False)

    @classmethod
    def from_lists(cls, containers: Iterable[Sequence[int]]) -> 'GameState':
        return cls(containers=tuple(tuple(c) for c in containers))

    def canonical_form(self, cfg: GameConfig) -> str:
        """Returns the canonical key, computing it on first use only."""
        if self._canonical is None:
            object.__setattr__(self, '_canonical', canonical_key(self.containers, cfg))
        return self._canonical

    def is_terminal(self, cfg: GameConfig) -> bool:
        """Solved when every container is empty or full with a single color."""
        for container in self.containers:
            if not is_same_color(container):
                return False
            if num_balls(container) and not is_full(container, cfg):
                return False
        return True

    def clone_with_balls_moved(self, from_idx: int, to_idx: int, num_balls: int) -> 'GameState':
        """New state with the top num_balls of from_idx stacked onto to_idx.

        The caller is responsible for passing a legal pour.
        """
        containers = list(self.containers)
        source = containers[from_idx]
        split = len(source) - num_balls
        containers[to_idx] = containers[to_idx] + source[split:]
        containers[from_idx] = source[:split]
        return GameState(containers=tuple(containers))

    def to_lists(self):
        return [list(c) for c in self.containers]
