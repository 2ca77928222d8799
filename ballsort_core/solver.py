from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Set, Tuple, Union

from .containers import GameConfig
from .errors import SearchInvariantError
from .moves import Transition, legal_transitions
from .paths import anchor_transitions, stitch_transitions
from .state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchStats:
    """Distinct canonical keys seen, and how many of them had their moves generated."""
    num_visited: int
    num_explored: int


@dataclass(frozen=True)
class Solved:
    transitions: Tuple[Transition, ...]
    stats: SearchStats
    solved: ClassVar[bool] = True

    @property
    def num_steps(self) -> int:
        return len(self.transitions)


@dataclass(frozen=True)
class Unsolved:
    stats: SearchStats
    solved: ClassVar[bool] = False


SolveResult = Union[Solved, Unsolved]


class DFSSolver:
    """
    Depth-first search over puzzle states with an explicit stack.

    States are keyed by their canonical form. The solver keeps:
    - the state object first registered for each key, so equivalent successors
      share one object;
    - the transition that most recently pushed each key, used to rebuild the path;
    - the set of keys whose moves were already generated.

    The first terminal state popped wins; the move list is not necessarily the shortest.
    Memory grows with the number of distinct states reached and is only released
    by the next start().

    Use solve() to run to completion, or start() then step() to bound the work
    from outside.
    """

    def __init__(self) -> None:
        self._cfg: Optional[GameConfig] = None
        self._initial: Optional[GameState] = None
        self._result: Optional[SolveResult] = None
        self._reset()

    def _reset(self) -> None:
        self._state_for_key: Dict[str, GameState] = {}
        self._transition_for_key: Dict[str, Transition] = {}
        self._explored: Set[str] = set()
        self._stack: List[GameState] = []

    def solve(self, cfg: GameConfig, initial: GameState) -> SolveResult:
        self.start(cfg, initial)
        result = None
        while result is None:
            result = self.step()
        return result

    def start(self, cfg: GameConfig, initial: GameState) -> None:
        """Clears previous bookkeeping and seeds the stack with the initial state."""
        self._reset()
        self._cfg = cfg
        self._initial = initial
        self._result = None
        self._visit(initial, None)
        logger.debug("search started from %s", initial.canonical_form(cfg))

    def step(self) -> Optional[SolveResult]:
        """Processes one state from the stack. Returns the result once the search is decided."""
        cfg = self._cfg
        if cfg is None:
            raise SearchInvariantError("step() called before start()")
        if self._result is not None:
            raise SearchInvariantError("step() called after the search finished")
        if not self._stack:
            raise SearchInvariantError("step() called on an empty frontier")

        state = self._stack.pop()
        if state.is_terminal(cfg):
            edges = stitch_transitions(self._transition_for_key, state, cfg)
            transitions = anchor_transitions(self._initial, edges)
            return self._finish(Solved(transitions=tuple(transitions), stats=self.stats()))

        key = state.canonical_form(cfg)
        if key not in self._explored:
            for t in legal_transitions(state, cfg, self._state_for_key, self._explored):
                self._visit(t.to_state, t)
            self._explored.add(key)

        if not self._stack:
            return self._finish(Unsolved(stats=self.stats()))
        return None

    def _visit(self, state: GameState, via: Optional[Transition]) -> None:
        key = state.canonical_form(self._cfg)
        self._state_for_key.setdefault(key, state)
        if via is not None:
            # A key may be pushed several times before it is explored; the latest edge wins.
            self._transition_for_key[key] = via
        self._stack.append(state)

    def _finish(self, result: SolveResult) -> SolveResult:
        self._result = result
        logger.debug(
            "search finished: solved=%s visited=%d explored=%d",
            result.solved, result.stats.num_visited, result.stats.num_explored,
        )
        return result

    def stats(self) -> SearchStats:
        return SearchStats(
            num_visited=len(self._state_for_key),
            num_explored=len(self._explored),
        )

    @property
    def pending(self) -> int:
        """Number of states waiting on the stack."""
        return len(self._stack)

    @property
    def done(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[SolveResult]:
        return self._result


def solve(cfg: GameConfig, initial: GameState) -> SolveResult:
    """Runs a fresh DFSSolver to completion."""
    return DFSSolver().solve(cfg, initial)


def solve_bounded(
    cfg: GameConfig,
    initial: GameState,
    max_steps: Optional[int] = None,
) -> Tuple[Optional[SolveResult], SearchStats]:
    """Pumps step() at most max_steps times (unbounded when None).

    Returns (result, stats); result is None when the budget ran out first.
    """
    solver = DFSSolver()
    solver.start(cfg, initial)
    steps = 0
    while max_steps is None or steps < max_steps:
        result = solver.step()
        steps += 1
        if result is not None:
            return result, result.stats
    logger.info("search stopped after %d steps with %d states pending", steps, solver.pending)
    return None, solver.stats()
