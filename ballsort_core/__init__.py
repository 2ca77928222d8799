"""
Ball sort puzzle solver core package.

Pure-logic modules for modelling and solving the ball sort puzzle:
- containers.py: GameConfig and container helpers
- state.py: GameState, terminal predicate, clone-with-pour
- hashkey.py: canonical (slot-order independent) state keys
- moves.py: Transition and move generation rules
- solver.py: depth-first search engine and result types
- paths.py: path reconstruction and replay
Adapters around the core: parse.py (JSON input), report.py (output),
deal.py (random puzzles), cli.py.
"""

from .containers import Container, GameConfig
from .errors import BallSortError, ConfigError, IllegalMoveError, SearchInvariantError
from .moves import Transition, apply_pour, legal_transitions
from .parse import load_game_input, parse_game_input
from .solver import DFSSolver, SearchStats, SolveResult, Solved, Unsolved, solve, solve_bounded
from .state import GameState

__all__ = [
    "BallSortError",
    "ConfigError",
    "Container",
    "DFSSolver",
    "GameConfig",
    "GameState",
    "IllegalMoveError",
    "SearchInvariantError",
    "SearchStats",
    "SolveResult",
    "Solved",
    "Transition",
    "Unsolved",
    "apply_pour",
    "legal_transitions",
    "load_game_input",
    "parse_game_input",
    "solve",
    "solve_bounded",
]
