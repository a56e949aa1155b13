#!/usr/bin/env python3
"""
Puzzle runner: solve both parts for a pipe map file.

Usage:
    python solve.py INPUT [--short] [--show] [--verbose]

--short   INPUT holds two samples separated by a '---' line; part 1 runs on
          the first, part 2 on the second
--show    Print the colored loop and interior for part 2
--verbose Debug logging
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Callable

from ascii_render import render
from pipe_parser import split_samples
from pipe_types import PipeLoopError, RuleSet
from pipeloop import solve

logger = logging.getLogger(__name__)

USAGE = "usage: solve.py INPUT [--short] [--show] [--verbose]"


def part1(text: str, rules: RuleSet = RuleSet()) -> int | None:
    """Farthest loop tile from the start, or None if the grid can't be solved."""
    try:
        return solve(text, rules).farthest
    except PipeLoopError as e:
        logger.error("part 1 failed: %s", e)
        return None


def part2(text: str, rules: RuleSet = RuleSet()) -> int | None:
    """Number of enclosed tiles, or None if the grid can't be solved."""
    try:
        return solve(text, rules).enclosed_count
    except PipeLoopError as e:
        logger.error("part 2 failed: %s", e)
        return None


def timed(fn: Callable[[str], int | None], text: str) -> tuple[int | None, float]:
    """Run fn on text, returning (result, seconds taken)."""
    began = time.perf_counter()
    result = fn(text)
    return result, time.perf_counter() - began


def format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds * 1e6:.3f}µs"


def run(text: str, short: bool = False, show: bool = False) -> tuple[int | None, int | None]:
    """Solve both parts, print them with timings and return them."""
    if short:
        part1_input, part2_input = split_samples(text)
    else:
        part1_input = part2_input = text

    part1_sol, part1_time = timed(part1, part1_input)
    part2_sol, part2_time = timed(part2, part2_input)

    print("Solution")
    print(f" Part 1: {part1_sol} (took {format_duration(part1_time)})")
    print(f" Part 2: {part2_sol} (took {format_duration(part2_time)})")

    if show and part2_sol is not None:
        solution = solve(part2_input)
        print(render(solution.grid, solution.path, solution.interior))

    return part1_sol, part2_sol


def main(argv: list[str] | None = None) -> int:
    """Entry point. Returns the process exit code."""
    args = sys.argv[1:] if argv is None else argv
    flags = {arg for arg in args if arg.startswith("--")}
    positional = [arg for arg in args if not arg.startswith("--")]

    unknown = flags - {"--short", "--show", "--verbose"}
    if unknown or len(positional) != 1:
        print(USAGE)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if "--verbose" in flags else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    data_path = Path(positional[0])
    if not data_path.exists():
        print(f"ERROR: {data_path} does not exist!")
        return 1

    text = data_path.read_text()
    short = "--short" in flags
    # Echo the input when running on short sample data
    if short:
        print(text)

    try:
        run(text, short=short, show="--show" in flags)
    except PipeLoopError as e:
        print(f"ERROR: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
