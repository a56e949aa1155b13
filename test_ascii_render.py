"""Tests for ascii_render module."""

import re

from ascii_render import GLYPHS, glyph, render
from pipe_parser import parse_grid
from pipe_types import Position, Tile
from pipeloop import solve

ANSI = re.compile(r"\x1b\[[0-9;]*m")

SQUARE = """
.....
.S-7.
.|.|.
.L-J.
.....
"""


def strip_ansi(s: str) -> str:
    return ANSI.sub("", s)


class TestGlyphs:
    """Tests for the glyph table."""

    def test_every_tile_has_a_glyph(self) -> None:
        """No tile is left without a glyph."""
        assert set(GLYPHS) == set(Tile)

    def test_bend_glyphs(self) -> None:
        """Bends draw as box corners."""
        assert glyph(Tile.NORTH_EAST) == "└"
        assert glyph(Tile.NORTH_WEST) == "┘"
        assert glyph(Tile.SOUTH_WEST) == "┐"
        assert glyph(Tile.SOUTH_EAST) == "┌"


class TestRender:
    """Tests for rendering grids."""

    def test_plain_grid(self) -> None:
        """Without color, the grid is drawn glyph for glyph."""
        output = render(parse_grid(SQUARE), colorize=False)

        assert output == "\n".join(
            [
                "•••••",
                "•S─┐•",
                "•│•│•",
                "•└─┘•",
                "•••••",
            ]
        )

    def test_colored_matches_plain_text(self) -> None:
        """Coloring never changes the characters drawn."""
        solution = solve(SQUARE)
        colored = render(solution.grid, solution.path, solution.interior, cursor=Position(2, 1))
        plain = render(solution.grid, solution.path, solution.interior, colorize=False)

        assert strip_ansi(colored) == plain

    def test_line_per_row(self) -> None:
        """Output has one line per grid row, one glyph per column."""
        grid = parse_grid("S-7.\n|.|.\nL-J.")
        lines = strip_ansi(render(grid)).split("\n")

        assert len(lines) == grid.rows
        assert all(len(line) == grid.cols for line in lines)
