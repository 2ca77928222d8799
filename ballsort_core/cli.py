from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .deal import deal_puzzle
from .errors import BallSortError, ConfigError
from .logs import setup_logging
from .parse import load_game_input, puzzle_to_json
from .paths import replay_transitions
from .report import aborted_to_json, format_solution, format_stats, solution_to_json
from .settings import log_level, max_steps_default
from .solver import solve_bounded

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_ABORTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Ball sort puzzle solver (depth-first search)')
    parser.add_argument('input', nargs='?', default='-', help='Puzzle JSON file, or - for stdin (default)')
    parser.add_argument('--random', action='store_true', help='Solve a randomly dealt puzzle instead of reading input')
    parser.add_argument('--colors', type=int, default=4, help='Number of colors for --random')
    parser.add_argument('--capacity', type=int, default=4, help='Balls per container for --random')
    parser.add_argument('--empty', type=int, default=2, help='Empty containers for --random')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for --random')
    parser.add_argument('--max-steps', type=int, default=None,
                        help='Stop after this many search steps (default: BALLSORT_MAX_STEPS or unlimited)')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    parser.add_argument('--verify', action='store_true', help='Replay the found moves and check the final state')
    parser.add_argument('--show-puzzle', action='store_true', help='Print the puzzle JSON before solving')
    parser.add_argument('--log-level', default=None, help='Log level (default: BALLSORT_LOG_LEVEL, or DEBUG if BALLSORT_DEBUG)')
    return parser


def _read_input(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or log_level())

    try:
        if args.random:
            cfg, state = deal_puzzle(args.colors, args.capacity, args.empty, seed=args.seed)
        else:
            cfg, state = load_game_input(_read_input(args.input))
    except (ConfigError, OSError) as e:
        print(f'Unable to load puzzle: {e}', file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.show_puzzle:
        print(json.dumps(puzzle_to_json(cfg, state)))

    try:
        max_steps = args.max_steps if args.max_steps is not None else max_steps_default()
    except ValueError as e:
        print(f'Invalid step budget: {e}', file=sys.stderr)
        return EXIT_BAD_INPUT
    if max_steps is not None and max_steps <= 0:
        max_steps = None
    logger.info('solving %d containers, capacity %d, %d colors',
                cfg.num_containers, cfg.max_balls_per_container, cfg.num_colors)
    result, stats = solve_bounded(cfg, state, max_steps)

    if result is None:
        if args.json:
            print(json.dumps(aborted_to_json(stats, max_steps)))
        else:
            print(format_stats(stats))
            print(f'Search aborted after {max_steps} steps')
        return EXIT_ABORTED

    if args.verify and result.solved:
        try:
            final = replay_transitions(state, result.transitions, cfg)
        except BallSortError as e:
            raise AssertionError(f'solution failed to replay: {e}') from e
        if not final.is_terminal(cfg):
            raise AssertionError('solution replay did not end in a solved state')
        logger.info('verified %d moves', len(result.transitions))

    if args.json:
        print(json.dumps(solution_to_json(result, cfg)))
    else:
        print(format_solution(result))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
