from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, List, Mapping, Optional

from .containers import GameConfig, free_space, is_full, top_color, top_run_length
from .errors import IllegalMoveError
from .state import GameState


@dataclass(frozen=True)
class Transition:
    """One pour: num_balls from slot from_idx onto slot to_idx (0-based), with both states."""
    from_idx: int
    to_idx: int
    num_balls: int
    from_state: GameState = field(repr=False, compare=False)
    to_state: GameState = field(repr=False, compare=False)


def pour_size(state: GameState, cfg: GameConfig, from_idx: int, to_idx: int) -> int:
    """Number of balls a pour from from_idx to to_idx moves, or 0 when the pour is not allowed."""
    if from_idx == to_idx:
        return 0
    source = state.containers[from_idx]
    if not source:
        return 0
    dest = state.containers[to_idx]
    if is_full(dest, cfg):
        return 0
    if dest and top_color(dest) != top_color(source):
        return 0
    # Only whole runs move.
    run = top_run_length(source)
    if run > free_space(dest, cfg):
        return 0
    # Emptying a container into an empty one only relabels slots.
    if run == len(source) and not dest:
        return 0
    return run


def legal_transitions(
    state: GameState,
    cfg: GameConfig,
    known: Optional[Mapping[str, GameState]] = None,
    explored: Optional[AbstractSet[str]] = None,
) -> List[Transition]:
    """
    Enumerates the pours out of a state, skipping those that lead back to an equivalent state.

    With search bookkeeping passed in, a successor equivalent to a known state is
    replaced by that known state object, and successors already explored are dropped.
    """
    known = known if known is not None else {}
    explored = explored if explored is not None else frozenset()
    start_key = state.canonical_form(cfg)
    out: List[Transition] = []
    n = len(state.containers)
    for from_idx in range(n):
        for to_idx in range(n):
            count = pour_size(state, cfg, from_idx, to_idx)
            if count == 0:
                continue
            nxt = state.clone_with_balls_moved(from_idx, to_idx, count)
            nxt_key = nxt.canonical_form(cfg)
            if nxt_key == start_key:
                continue
            nxt = known.get(nxt_key, nxt)
            if nxt_key in explored:
                continue
            out.append(Transition(from_idx, to_idx, count, state, nxt))
    return out


def apply_pour(state: GameState, cfg: GameConfig, from_idx: int, to_idx: int) -> Transition:
    """Performs a single pour, raising IllegalMoveError when the move rules reject it."""
    n = len(state.containers)
    if not (0 <= from_idx < n and 0 <= to_idx < n):
        raise IllegalMoveError(f"container index out of range: {from_idx} -> {to_idx} (have {n})")
    count = pour_size(state, cfg, from_idx, to_idx)
    if count == 0:
        raise IllegalMoveError(f"cannot pour from container {from_idx} to {to_idx}")
    nxt = state.clone_with_balls_moved(from_idx, to_idx, count)
    if nxt.canonical_form(cfg) == state.canonical_form(cfg):
        raise IllegalMoveError(f"pour from container {from_idx} to {to_idx} does not change the state")
    return Transition(from_idx, to_idx, count, state, nxt)
