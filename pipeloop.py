"""
Closed pipe loop detection and interior enumeration.
Pipeline: parse -> trace_loop (boundary path) -> classify (winding sign) -> enclosed (interior set).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator

from pipe_parser import parse_grid
from pipe_types import (
    BENDS,
    CARDINALS,
    PIPES,
    Direction,
    FloodOrder,
    InvariantViolation,
    MissingStartError,
    PipeGrid,
    Position,
    RuleSet,
    Tile,
)

logger = logging.getLogger(__name__)

BoundaryPath = tuple[Position, ...]


# =============================================================================
# Static Tables
# =============================================================================


CONNECTIONS: dict[Tile, tuple[Direction, Direction]] = {
    Tile.VERTICAL: (Direction.N, Direction.S),
    Tile.HORIZONTAL: (Direction.E, Direction.W),
    Tile.NORTH_EAST: (Direction.N, Direction.E),
    Tile.NORTH_WEST: (Direction.N, Direction.W),
    Tile.SOUTH_WEST: (Direction.S, Direction.W),
    Tile.SOUTH_EAST: (Direction.S, Direction.E),
    Tile.GROUND: (Direction.NONE, Direction.NONE),
    Tile.START: (Direction.NONE, Direction.NONE),
}

# (pipe, side entered from) -> side left through
EXITS: dict[tuple[Tile, Direction], Direction] = {
    (tile, entry): exit_dir
    for tile in PIPES
    for entry, exit_dir in (CONNECTIONS[tile], CONNECTIONS[tile][::-1])
}

# (bend, side entered from) -> +1 for a clockwise turn, -1 for counter-clockwise
WINDING: dict[tuple[Tile, Direction], int] = {
    (tile, entry): 1 if exit_dir == entry.opposite.clockwise else -1
    for (tile, entry), exit_dir in EXITS.items()
    if tile in BENDS
}


def _interior_sides(heading_in: Direction, heading_out: Direction, sign: int) -> tuple[Direction, ...]:
    """Sides 90 degrees off the direction of travel, turned toward the interior."""
    sides: list[Direction] = []
    for heading in (heading_in, heading_out):
        side = heading.clockwise if sign > 0 else heading.counterclockwise
        if side not in sides:
            sides.append(side)
    return tuple(sides)


# (pipe, side entered from, sign) -> sides of the tile facing the interior
SEED_SIDES: dict[tuple[Tile, Direction, int], tuple[Direction, ...]] = {
    (tile, entry, sign): _interior_sides(entry.opposite, exit_dir, sign)
    for (tile, entry), exit_dir in EXITS.items()
    for sign in (1, -1)
}


# =============================================================================
# Grid Queries
# =============================================================================


def connection_directions(tile: Tile) -> tuple[Direction, Direction]:
    """The two sides a tile connects; (NONE, NONE) for ground and start."""
    return CONNECTIONS[tile]


def start_position(grid: PipeGrid) -> Position:
    """
    Find the start tile, scanning row-major.

    Raises:
        MissingStartError: If the grid has no start tile
    """
    for pos in grid.positions():
        if grid.tile_at(pos) is Tile.START:
            return pos
    raise MissingStartError(
        f"No start tile '{Tile.START.value}' in {grid.cols}x{grid.rows} grid"
    )


def connects(grid: PipeGrid, pos: Position, direction: Direction) -> bool:
    """
    Whether the neighbor in `direction` connects back toward `pos`.

    Asks the neighbor rather than the tile at `pos`, so it works for the start
    tile whose own shape is unknown. Never wraps around grid edges.
    """
    if direction is Direction.NONE:
        return False
    neighbor = pos.step(direction)
    if not grid.in_bounds(neighbor):
        return False
    return direction.opposite in connection_directions(grid.tile_at(neighbor))


def direction_between(a: Position, b: Position) -> Direction:
    """Direction of the step from a to an adjacent b."""
    for direction in CARDINALS:
        if a.step(direction) == b:
            return direction
    raise InvariantViolation(
        f"Positions are not grid-adjacent\n"
        f"  From: ({a.col}, {a.row})\n"
        f"  To: ({b.col}, {b.row})"
    )


# =============================================================================
# Loop Tracing
# =============================================================================


def initial_direction(grid: PipeGrid, start: Position) -> Direction:
    """
    First direction taken out of the start tile.
    Probes N, E, S, W in that order and takes the first connecting neighbor.

    Raises:
        InvariantViolation: If no neighbor connects to the start
    """
    for direction in CARDINALS:
        if connects(grid, start, direction):
            return direction
    raise InvariantViolation(
        f"Start tile at ({start.col}, {start.row}) has no connecting neighbor"
    )


def trace_loop(grid: PipeGrid, start: Position | None = None, rules: RuleSet = RuleSet()) -> BoundaryPath:
    """
    Walk the closed loop through the start tile.

    Returns the positions visited after leaving the start, ending with the
    start itself once the walk closes. Each loop tile appears exactly once.

    Args:
        grid: The pipe grid
        start: Start position (found by scanning if omitted)
        rules: RuleSet providing the step limit

    Raises:
        InvariantViolation: If the walk dead-ends, leaves the loop or runs
            longer than the step limit
    """
    if start is None:
        start = start_position(grid)
    limit = rules.step_limit if rules.step_limit is not None else grid.rows * grid.cols

    heading = initial_direction(grid, start)
    logger.debug("trace_loop: start=(%d, %d), initial direction=%s", start.col, start.row, heading.value)

    path: list[Position] = []
    pos = start.step(heading)
    while True:
        path.append(pos)
        if len(path) > limit:
            raise InvariantViolation(
                f"Loop trace exceeded step limit of {limit} without returning to start"
            )

        tile = grid.tile_at(pos)
        entry = heading.opposite
        exit_dir = EXITS.get((tile, entry))
        if exit_dir is None:
            raise InvariantViolation(
                f"Walk reached a tile it cannot pass through\n"
                f"  Tile: '{tile.value}' at ({pos.col}, {pos.row})\n"
                f"  Entered from: {entry.value}"
            )

        following = pos.step(exit_dir)
        if following == start:
            path.append(start)
            break
        if not connects(grid, pos, exit_dir):
            raise InvariantViolation(
                f"Loop is broken\n"
                f"  Tile: '{tile.value}' at ({pos.col}, {pos.row})\n"
                f"  Exit {exit_dir.value} does not connect back"
            )

        pos = following
        heading = exit_dir

    logger.info("trace_loop: loop of %d tiles", len(path))
    return tuple(path)


def reverse_loop(path: BoundaryPath) -> tuple[BoundaryPath, Direction]:
    """
    The same loop walked the other way round.

    Returns:
        (reversed_path, initial_direction) with the start still last
    """
    start = path[-1]
    reversed_path = tuple(reversed(path[:-1])) + (start,)
    return reversed_path, direction_between(start, reversed_path[0])


def _walk(
    grid: PipeGrid, path: BoundaryPath, first_heading: Direction
) -> Iterator[tuple[Position, Tile, Direction, Direction]]:
    """Yield (position, tile, entered_from, heading_out) along the path."""
    heading = first_heading
    for pos in path:
        tile = grid.tile_at(pos)
        entry = heading.opposite
        if tile is Tile.START:
            exit_dir = first_heading
        else:
            exit_dir = EXITS.get((tile, entry))
            if exit_dir is None:
                raise InvariantViolation(
                    f"Path holds an inconsistent transition\n"
                    f"  Tile: '{tile.value}' at ({pos.col}, {pos.row})\n"
                    f"  Entered from: {entry.value}"
                )
        yield pos, tile, entry, exit_dir
        heading = exit_dir


# =============================================================================
# Orientation
# =============================================================================


def classify(grid: PipeGrid, path: BoundaryPath, initial_direction: Direction) -> int:
    """
    Winding sign of the loop: +1 clockwise, -1 counter-clockwise (on screen).

    Sums +1 per right turn and -1 per left turn over the bends. A simple
    closed loop turns four quarter turns in total one way, so the sign of the
    total fixes which side of travel is the interior (+1: right).
    """
    total = 0
    for pos, tile, entry, _ in _walk(grid, path, initial_direction):
        if tile not in BENDS:
            continue
        turn = WINDING.get((tile, entry))
        if turn is None:
            raise InvariantViolation(
                f"No winding entry for '{tile.value}' entered from {entry.value} at ({pos.col}, {pos.row})"
            )
        total += turn
    return 1 if total > 0 else -1


# =============================================================================
# Interior
# =============================================================================


def seed_cells(
    grid: PipeGrid, path: BoundaryPath, sign: int, initial_direction: Direction
) -> set[Position]:
    """
    Cells directly beside the loop on its interior side.

    Seeds are discarded when out of bounds, on the start or on the path.
    """
    start = path[-1]
    on_path = set(path)
    seeds: set[Position] = set()
    for pos, tile, entry, exit_dir in _walk(grid, path, initial_direction):
        if tile is Tile.START:
            sides = _interior_sides(entry.opposite, exit_dir, sign)
        else:
            sides = SEED_SIDES[(tile, entry, sign)]
        for side in sides:
            candidate = pos.step(side)
            if grid.in_bounds(candidate) and candidate != start and candidate not in on_path:
                seeds.add(candidate)
    return seeds


def flood_fill(
    grid: PipeGrid,
    path: Iterable[Position],
    seeds: Iterable[Position],
    rules: RuleSet = RuleSet(),
) -> set[Position]:
    """
    Expand seeds across 4-adjacent cells that are in bounds and off the path.

    The worklist order comes from rules.flood_order; it changes the visiting
    order only, never the resulting set.
    """
    on_path = set(path)
    inside = {seed for seed in seeds if seed not in on_path}
    worklist = deque(inside)
    pop = worklist.pop if rules.flood_order is FloodOrder.STACK else worklist.popleft

    while worklist:
        item = pop()
        for direction in CARDINALS:
            candidate = item.step(direction)
            if not grid.in_bounds(candidate):
                continue
            if candidate not in on_path and candidate not in inside:
                inside.add(candidate)
                worklist.append(candidate)
    return inside


def enclosed(
    grid: PipeGrid,
    path: BoundaryPath,
    sign: int,
    initial_direction: Direction,
    rules: RuleSet = RuleSet(),
) -> set[Position]:
    """Every non-loop cell strictly inside the loop."""
    seeds = seed_cells(grid, path, sign, initial_direction)
    inside = flood_fill(grid, path, seeds, rules)
    logger.info("enclosed: %d seeds flooded to %d interior cells", len(seeds), len(inside))
    return inside


# =============================================================================
# Puzzle Outputs
# =============================================================================


def farthest_point(path: BoundaryPath) -> int:
    """Loop distance from the start to the farthest loop tile, going either way round."""
    n = len(path)
    return max(min(i + 1, n - i) for i in range(n))


@dataclass(frozen=True)
class LoopSolution:
    """Everything derived from one pipe grid."""

    grid: PipeGrid
    path: BoundaryPath
    initial_direction: Direction
    sign: int
    interior: frozenset[Position]

    @property
    def start(self) -> Position:
        return self.path[-1]

    @property
    def farthest(self) -> int:
        return farthest_point(self.path)

    @property
    def enclosed_count(self) -> int:
        return len(self.interior)


def solve(text: str, rules: RuleSet = RuleSet()) -> LoopSolution:
    """
    Parse a grid and solve it end to end.

    Raises:
        ParseError, MissingStartError, InvariantViolation
    """
    grid = parse_grid(text)
    start = start_position(grid)
    path = trace_loop(grid, start, rules)
    first = initial_direction(grid, start)
    sign = classify(grid, path, first)
    logger.info("solve: winding sign %+d", sign)
    interior = enclosed(grid, path, sign, first, rules)
    return LoopSolution(grid, path, first, sign, frozenset(interior))
