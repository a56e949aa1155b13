"""
Grid parsing for pipe maps.

Format:
- One grid row per line, all lines the same length
- One tile per character: | - L J 7 F . S
"""

from __future__ import annotations

from pipe_types import ParseError, PipeGrid, Tile

__all__ = ["parse_grid", "split_samples"]

VALID_SYMBOLS = "".join(tile.value for tile in Tile)


def parse_grid(text: str) -> PipeGrid:
    """
    Parse a pipe map into a PipeGrid.

    Leading and trailing blank lines are ignored, so a trailing newline or an
    indented triple-quoted literal's surrounding lines are fine. Lines are
    otherwise taken literally: no padding, no stripping inside the grid.

    Example:
        \"\"\"
        .....
        .S-7.
        .|.|.
        .L-J.
        .....
        \"\"\"

    Args:
        text: The grid, one row per line

    Returns:
        PipeGrid with one Tile per character

    Raises:
        ParseError: If the grid is empty, ragged or has an unknown character
    """
    lines = text.strip("\n").split("\n")
    lines = [line.rstrip("\r") for line in lines]
    if not lines or not lines[0]:
        raise ParseError("Empty grid: expected at least one row and one column")

    rows: list[tuple[Tile, ...]] = []
    for row_idx, line in enumerate(lines):
        tiles: list[Tile] = []
        for col_idx, char in enumerate(line):
            try:
                tiles.append(Tile(char))
            except ValueError:
                raise ParseError(
                    f"Invalid character '{char}'\n"
                    f"  Row {row_idx}: \"{line}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: {' '.join(VALID_SYMBOLS)}"
                ) from None
        rows.append(tuple(tiles))

    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{lines[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of tiles"
        raise ParseError(error_msg)

    return PipeGrid(tuple(rows))


def split_samples(text: str, divider: str = "---") -> tuple[str, str]:
    """
    Split a short-input file holding two samples separated by a divider line.

    The divider must fill a whole line, since runs of '-' are valid grid rows.

    Returns:
        (first_sample, second_sample)

    Raises:
        ParseError: If the divider is missing
    """
    lines = text.split("\n")
    for idx, line in enumerate(lines):
        if line.rstrip("\r") == divider:
            return "\n".join(lines[:idx]), "\n".join(lines[idx + 1:])
    raise ParseError(f"Couldn't find divider line '{divider}' between the two samples")
