"""Tests for pipe_parser module."""

import pytest

from pipe_parser import parse_grid, split_samples
from pipe_types import ParseError, PipeGrid, Position, Tile


class TestParseGrid:
    """Tests for the pipe map parser."""

    def test_simple_grid(self) -> None:
        """Parse a small grid into typed tiles."""
        grid = parse_grid("S-7\n|.|\nL-J")

        assert isinstance(grid, PipeGrid)
        assert grid.rows == 3
        assert grid.cols == 3
        assert grid.tiles[0] == (Tile.START, Tile.HORIZONTAL, Tile.SOUTH_WEST)
        assert grid.tiles[1] == (Tile.VERTICAL, Tile.GROUND, Tile.VERTICAL)
        assert grid.tiles[2] == (Tile.NORTH_EAST, Tile.HORIZONTAL, Tile.NORTH_WEST)

    def test_every_symbol(self) -> None:
        """Each of the eight symbols maps to its tile."""
        grid = parse_grid("|-LJ7F.S")

        assert grid.tiles[0] == (
            Tile.VERTICAL,
            Tile.HORIZONTAL,
            Tile.NORTH_EAST,
            Tile.NORTH_WEST,
            Tile.SOUTH_WEST,
            Tile.SOUTH_EAST,
            Tile.GROUND,
            Tile.START,
        )

    def test_width_and_height_are_max_indices(self) -> None:
        """width/height are the largest valid indices, not counts."""
        grid = parse_grid(".....\n.....\n.....")

        assert grid.cols == 5
        assert grid.rows == 3
        assert grid.width == 4
        assert grid.height == 2

    def test_surrounding_blank_lines_ignored(self) -> None:
        """Triple-quoted literals with leading/trailing newlines parse."""
        definition = """
.S.
...
"""
        grid = parse_grid(definition)

        assert grid.rows == 2
        assert grid.tile_at(Position(1, 0)) is Tile.START

    def test_windows_line_endings(self) -> None:
        """Carriage returns are not part of the grid."""
        grid = parse_grid("S-7\r\n|.|\r\nL-J\r\n")

        assert grid.rows == 3
        assert grid.cols == 3

    def test_in_bounds(self) -> None:
        """in_bounds never wraps around an edge."""
        grid = parse_grid("...\n...")

        assert grid.in_bounds(Position(0, 0))
        assert grid.in_bounds(Position(2, 1))
        assert not grid.in_bounds(Position(3, 0))
        assert not grid.in_bounds(Position(0, 2))
        assert not grid.in_bounds(Position(-1, 0))
        assert not grid.in_bounds(Position(0, -1))

    def test_positions_row_major(self) -> None:
        """positions() walks rows first."""
        grid = parse_grid("..\n..")

        assert list(grid.positions()) == [
            Position(0, 0),
            Position(1, 0),
            Position(0, 1),
            Position(1, 1),
        ]


class TestParseErrors:
    """Tests for malformed grids."""

    def test_unknown_character(self) -> None:
        """A character outside the tile set is rejected."""
        with pytest.raises(ParseError, match="Invalid character 'X'") as exc_info:
            parse_grid("S-7\n|X|\nL-J")

        error_msg = str(exc_info.value)
        assert "Row 1" in error_msg
        assert "column 1" in error_msg

    def test_lowercase_is_not_start(self) -> None:
        """Symbols are case-sensitive."""
        with pytest.raises(ParseError, match="Invalid character 's'"):
            parse_grid("s-7\n|.|\nL-J")

    def test_space_inside_line(self) -> None:
        """Whitespace inside a row is not a tile."""
        with pytest.raises(ParseError):
            parse_grid("S 7\n|.|\nL-J")

    def test_ragged_rows(self) -> None:
        """Rows of different lengths are rejected."""
        with pytest.raises(ParseError, match="Inconsistent row lengths") as exc_info:
            parse_grid("S-7\n|.|.\nL-J")

        error_msg = str(exc_info.value)
        assert "Row 1: 4 columns" in error_msg

    def test_empty_grid(self) -> None:
        """An empty input has no rows."""
        with pytest.raises(ParseError, match="Empty grid"):
            parse_grid("")

    def test_blank_lines_only(self) -> None:
        """Only newlines is still empty."""
        with pytest.raises(ParseError, match="Empty grid"):
            parse_grid("\n\n\n")

    def test_parse_error_is_value_error(self) -> None:
        """Callers catching ValueError still see parse failures."""
        with pytest.raises(ValueError):
            parse_grid("?")


class TestSplitSamples:
    """Tests for splitting short sample files."""

    def test_split_on_divider(self) -> None:
        """Both samples come back, divider removed."""
        first, second = split_samples("S-7\n|.|\nL-J\n---\n.S.\n...\n")

        assert parse_grid(first).rows == 3
        assert parse_grid(second).rows == 2

    def test_missing_divider(self) -> None:
        """A short file without the divider is an error."""
        with pytest.raises(ParseError, match="divider line"):
            split_samples("S-7\n|.|\nL-J\n")

    def test_dashes_inside_grid_are_not_a_divider(self) -> None:
        """Only a line holding just the divider splits."""
        first, second = split_samples("L---J\n---\n.S.\n")

        assert first == "L---J"
        assert parse_grid(second).rows == 1
