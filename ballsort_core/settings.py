from __future__ import annotations

import os
from typing import Optional, Tuple

_TRUTHY = ('1', 'true', 'yes', 'on')


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


def max_steps_default() -> Optional[int]:
    """Step budget from BALLSORT_MAX_STEPS; 0 or unset means unlimited."""
    steps = env_int('BALLSORT_MAX_STEPS', 0)
    return steps if steps > 0 else None


def log_level() -> str:
    explicit = os.getenv('BALLSORT_LOG_LEVEL')
    if explicit:
        return explicit.strip().upper()
    return 'DEBUG' if env_flag('BALLSORT_DEBUG') else 'INFO'


def deal_limits() -> Tuple[int, int, int]:
    """Upper bounds (colors, capacity, empty containers) for puzzles dealt on request."""
    return (
        env_int('BALLSORT_MAX_COLORS', 12),
        env_int('BALLSORT_MAX_CAPACITY', 8),
        env_int('BALLSORT_MAX_EMPTY', 4),
    )
