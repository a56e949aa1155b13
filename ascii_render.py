"""
ASCII rendering for solved pipe grids.

Draws every tile as a box-drawing glyph and colors it by role:
start, loop, interior, or the highlighted cursor cell.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from pipe_types import PipeGrid, Position, Tile

logger = logging.getLogger(__name__)

GLYPHS: dict[Tile, str] = {
    Tile.VERTICAL: "│",
    Tile.HORIZONTAL: "─",
    Tile.NORTH_EAST: "└",
    Tile.NORTH_WEST: "┘",
    Tile.SOUTH_WEST: "┐",
    Tile.SOUTH_EAST: "┌",
    Tile.GROUND: "•",
    Tile.START: "S",
}


def glyph(tile: Tile) -> str:
    """Box-drawing glyph for a tile."""
    return GLYPHS[tile]


def _plain(s: str) -> str:
    return s


def render(
    grid: PipeGrid,
    path: Iterable[Position] = (),
    interior: Iterable[Position] = (),
    cursor: Position | None = None,
    colorize: bool = True,
) -> str:
    """
    Render a pipe grid to a string, one line per row.

    Args:
        grid: The grid to draw
        path: Loop positions (green); the start tile is drawn red
        interior: Enclosed positions (blue)
        cursor: Optional cell to highlight in white
        colorize: False to return plain text without ANSI codes

    Returns:
        Rendered string with ANSI color codes unless colorize is False
    """
    on_path = set(path)
    inside = set(interior)

    def color_for(pos: Position, tile: Tile) -> Callable[[str], str]:
        if not colorize:
            return _plain
        if pos == cursor:
            return chalk.white
        if tile is Tile.START:
            return chalk.red
        if pos in on_path:
            return chalk.green
        if pos in inside:
            return chalk.blue
        return _plain

    buffer: list[list[str]] = [[" " for _ in range(grid.cols)] for _ in range(grid.rows)]
    for pos in grid.positions():
        tile = grid.tile_at(pos)
        buffer[pos.row][pos.col] = color_for(pos, tile)(glyph(tile))

    logger.debug(
        "render: %dx%d grid, %d loop cells, %d interior cells",
        grid.cols,
        grid.rows,
        len(on_path),
        len(inside),
    )
    return "\n".join("".join(row) for row in buffer)
