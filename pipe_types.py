"""
Shared type definitions for the pipe loop solver.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)
    NONE = "-"  # No direction yet (start of a walk)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE[self]

    @property
    def clockwise(self) -> Direction:
        """Quarter turn to the right, as seen on screen."""
        return _CLOCKWISE[self]

    @property
    def counterclockwise(self) -> Direction:
        """Quarter turn to the left, as seen on screen."""
        return _COUNTERCLOCKWISE[self]


_OPPOSITE = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
    Direction.NONE: Direction.NONE,
}

_CLOCKWISE = {
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
    Direction.NONE: Direction.NONE,
}

_COUNTERCLOCKWISE = {after: before for before, after in _CLOCKWISE.items()}

# (dcol, drow) per direction
DELTAS = {
    Direction.N: (0, -1),
    Direction.E: (1, 0),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
    Direction.NONE: (0, 0),
}

CARDINALS = (Direction.N, Direction.E, Direction.S, Direction.W)


class Tile(Enum):
    """A grid tile, keyed by its input symbol."""

    VERTICAL = "|"
    HORIZONTAL = "-"
    NORTH_EAST = "L"
    NORTH_WEST = "J"
    SOUTH_WEST = "7"
    SOUTH_EAST = "F"
    GROUND = "."
    START = "S"

    @property
    def is_bend(self) -> bool:
        return self in BENDS


BENDS = frozenset({Tile.NORTH_EAST, Tile.NORTH_WEST, Tile.SOUTH_WEST, Tile.SOUTH_EAST})

PIPES = frozenset({Tile.VERTICAL, Tile.HORIZONTAL}) | BENDS


@dataclass(frozen=True)
class Position:
    """A cell position: zero-based column and row."""

    col: int
    row: int

    def step(self, direction: Direction) -> Position:
        """Adjacent position. May fall off the grid; callers guard with in_bounds."""
        dcol, drow = DELTAS[direction]
        return Position(self.col + dcol, self.row + drow)


@dataclass(frozen=True)
class PipeGrid:
    """A 2D grid of pipe tiles."""

    tiles: tuple[tuple[Tile, ...], ...]

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    @property
    def width(self) -> int:
        """Largest valid column index."""
        return self.cols - 1

    @property
    def height(self) -> int:
        """Largest valid row index."""
        return self.rows - 1

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.col <= self.width and 0 <= pos.row <= self.height

    def tile_at(self, pos: Position) -> Tile:
        return self.tiles[pos.row][pos.col]

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield Position(col, row)


# =============================================================================
# Configuration
# =============================================================================


class FloodOrder(Enum):
    """Worklist discipline for the interior flood fill."""

    STACK = "stack"  # LIFO
    QUEUE = "queue"  # FIFO


@dataclass(frozen=True)
class RuleSet:
    """Rules governing solver behavior."""

    flood_order: FloodOrder = FloodOrder.STACK
    step_limit: int | None = None  # None = rows * cols


# =============================================================================
# Errors
# =============================================================================


class PipeLoopError(Exception):
    """Base class for every failure while solving a pipe grid."""


class ParseError(PipeLoopError, ValueError):
    """Grid text is empty, ragged or contains an unknown character."""


class MissingStartError(PipeLoopError, LookupError):
    """The grid has no start tile."""


class InvariantViolation(PipeLoopError, RuntimeError):
    """A walk reached a (tile, direction) combination outside the static tables."""
