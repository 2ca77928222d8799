from __future__ import annotations


class BallSortError(Exception):
    """Base class for every error raised by ballsort_core."""


class ConfigError(BallSortError, ValueError):
    """The puzzle configuration or initial layout is malformed or inconsistent."""


class IllegalMoveError(BallSortError, ValueError):
    """A pour was requested that the move rules do not allow."""


class SearchInvariantError(BallSortError, AssertionError):
    """Search bookkeeping reached a state that a correct search can never produce."""
