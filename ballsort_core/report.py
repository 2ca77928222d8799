from __future__ import annotations

from typing import Any, Dict, List, Optional

from .containers import GameConfig
from .moves import Transition
from .solver import SearchStats, SolveResult


def format_stats(stats: SearchStats) -> str:
    return (
        f"Search stats: num visited states {stats.num_visited}, "
        f"num explored states {stats.num_explored}"
    )


def format_step(i: int, t: Transition) -> str:
    # Slots are shown 1-based.
    return f"Step {i + 1:3d}: Move {t.num_balls} balls from {t.from_idx + 1:3d} to {t.to_idx + 1:3d} container"


def format_solution(result: SolveResult) -> str:
    """Human-readable report: stats line, then the move list or a no-solution line."""
    lines: List[str] = [format_stats(result.stats)]
    if not result.solved:
        lines.append("No solution found")
        return "\n".join(lines)
    lines.append(f"Solution found with {len(result.transitions)} steps")
    for i, t in enumerate(result.transitions):
        lines.append(format_step(i, t))
    return "\n".join(lines)


def stats_to_json(stats: SearchStats) -> Dict[str, int]:
    return {"visited": stats.num_visited, "explored": stats.num_explored}


def transition_to_json(t: Transition, cfg: GameConfig) -> Dict[str, Any]:
    source = t.from_state.containers[t.from_idx]
    return {
        "from": t.from_idx + 1,
        "to": t.to_idx + 1,
        "balls": t.num_balls,
        "color": cfg.color_name(source[-1]),
    }


def solution_to_json(result: SolveResult, cfg: GameConfig) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "solved": result.solved,
        "stats": stats_to_json(result.stats),
        "moves": None,
    }
    if result.solved:
        out["moves"] = [transition_to_json(t, cfg) for t in result.transitions]
    return out


def aborted_to_json(stats: SearchStats, max_steps: Optional[int]) -> Dict[str, Any]:
    return {
        "solved": False,
        "aborted": True,
        "maxSteps": max_steps,
        "stats": stats_to_json(stats),
        "moves": None,
    }
