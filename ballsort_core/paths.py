from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Set

from .containers import Container, GameConfig
from .errors import IllegalMoveError, SearchInvariantError
from .moves import Transition, apply_pour
from .state import GameState


def stitch_transitions(
    reachability: Mapping[str, Transition],
    terminal: GameState,
    cfg: GameConfig,
) -> List[Transition]:
    """Follows parent edges back from the terminal state and returns them in forward order."""
    transitions: List[Transition] = []
    seen: Set[str] = set()
    state = terminal
    while True:
        key = state.canonical_form(cfg)
        if key in seen:
            raise SearchInvariantError(f"cycle in reachability table at state {key}")
        seen.add(key)
        edge = reachability.get(key)
        if edge is None:
            # Only the initial state has no parent edge.
            break
        transitions.append(edge)
        state = edge.from_state
    transitions.reverse()
    return transitions


def _slot_map(representative: GameState, actual: GameState) -> List[int]:
    """For each slot of representative, a distinct slot of actual holding an equal container."""
    free: Dict[Container, List[int]] = {}
    for idx, container in enumerate(actual.containers):
        free.setdefault(container, []).append(idx)
    mapping: List[int] = []
    for container in representative.containers:
        slots = free.get(container)
        if not slots:
            raise SearchInvariantError("path state is not a slot permutation of the replayed state")
        mapping.append(slots.pop(0))
    return mapping


def anchor_transitions(initial: GameState, transitions: Iterable[Transition]) -> List[Transition]:
    """
    Rewrites a stitched path so it replays from the initial layout.

    Search edges point at shared representative states, whose slot order may
    differ from the state the previous pour actually produces. Each edge's slot
    indices are translated onto the running concrete state.
    """
    out: List[Transition] = []
    state = initial
    for edge in transitions:
        mapping = _slot_map(edge.from_state, state)
        src = mapping[edge.from_idx]
        dst = mapping[edge.to_idx]
        nxt = state.clone_with_balls_moved(src, dst, edge.num_balls)
        out.append(Transition(src, dst, edge.num_balls, state, nxt))
        state = nxt
    return out


def replay_transitions(initial: GameState, transitions: Iterable[Transition], cfg: GameConfig) -> GameState:
    """Re-applies each pour to the initial state and returns the final state."""
    state = initial
    for i, t in enumerate(transitions):
        step = apply_pour(state, cfg, t.from_idx, t.to_idx)
        if step.num_balls != t.num_balls:
            raise IllegalMoveError(
                f"step {i + 1}: expected to move {t.num_balls} balls, the pour moves {step.num_balls}"
            )
        state = step.to_state
    return state
