"""
Interactive viewer for a solved pipe grid.
Display the grid and step a cursor along the loop with keyboard commands.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from pipe_types import PipeLoopError, Position
from pipeloop import LoopSolution, solve


class LoopViewer:
    """Interactive viewer stepping along a traced loop."""

    def __init__(self, solution: LoopSolution) -> None:
        self.solution = solution
        self.cursor = len(solution.path) - 1  # Start tile is last on the path
        self.show_interior = True
        self.console = Console()
        self.status_message = "Ready"

    @property
    def cursor_position(self) -> Position:
        return self.solution.path[self.cursor]

    def loop_distance(self) -> int:
        """Steps from the start to the cursor, going the shorter way round."""
        n = len(self.solution.path)
        steps = (self.cursor + 1) % n
        return min(steps, n - steps)

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        solution = self.solution
        pos = self.cursor_position
        interior = solution.interior if self.show_interior else ()
        grid_text = render(solution.grid, solution.path, interior, cursor=pos)

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"({pos.col}, {pos.row}) '{solution.grid.tile_at(pos).value}'\n")
        status.append("Step: ", style="bold")
        status.append(f"{(self.cursor + 1) % len(solution.path)} of {len(solution.path)}")
        status.append(f" (distance from start {self.loop_distance()})\n")
        status.append("Farthest: ", style="bold")
        status.append(f"{solution.farthest}   ")
        status.append("Enclosed: ", style="bold")
        status.append(f"{solution.enclosed_count}\n\n")

        # Convert ANSI-colored grid text to Rich Text
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N / D - Step forward along the loop\n")
        status.append("  P / A - Step back\n")
        status.append("  I - Toggle interior shading\n")
        status.append("  R - Reset cursor to start\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Pipe Loop Viewer", border_style="green", width=80)

    def step(self, delta: int) -> None:
        """Move the cursor along the loop, wrapping at the start."""
        self.cursor = (self.cursor + delta) % len(self.solution.path)
        pos = self.cursor_position
        self.status_message = f"Moved to ({pos.col}, {pos.row})"

    def toggle_interior(self) -> None:
        self.show_interior = not self.show_interior
        self.status_message = "Interior shown" if self.show_interior else "Interior hidden"

    def reset_cursor(self) -> None:
        self.cursor = len(self.solution.path) - 1
        self.status_message = "Cursor reset to start"

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the viewer should quit."""
        key = key.lower()
        if key == "q":
            self.status_message = "Quitting..."
            return False
        elif key in ("n", "d"):
            self.step(1)
        elif key in ("p", "a"):
            self.step(-1)
        elif key == "i":
            self.toggle_interior()
        elif key == "r":
            self.reset_cursor()
        else:
            self.status_message = f"Unknown key: {repr(key)}"
        return True

    def run(self) -> None:
        """Run the viewer until the user quits."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    square="""
.....
.S-7.
.|.|.
.L-J.
.....
""",
    junk="""
-L|F7
7S-7|
L|7||
-L-J|
L|-JF
""",
    squeeze="""
..........
.S------7.
.|F----7|.
.||....||.
.||....||.
.|L-7F-J|.
.|..||..|.
.L--JL--J.
..........
""",
    large="""
.F----7F7F7F7F-7....
.|F--7||||||||FJ....
.||.FJ||||||||L7....
FJL7L7LJLJ||LJ.L-7..
L--J.L7...LJS7F-7L7.
....F-J..F7FJ|L7L7L7
....L7.F7||L7|.L7L7|
.....|FJLJ|FJ|F7|.LJ
....FJL-7.||.||||...
....L---J.LJ.LJLJ...
""",
    noisy="""
FF7FSF7F7F7F7F7F---7
L|LJ||||||||||||F--J
FL-7LJLJ||||||LJL-77
F--JF--7||LJLJ7F7FJ-
L---JF-JLJ.||-FJLJJ7
|F|F-JF---7F7-L7L|7|
|FFJF7L7F-JF7|JL---7
7-L-JL7||F7|L7F-7F7|
L.L7LFJ|||||FJL7||LJ
L7JLJL-JLJLJL--JLJ.L
""",
)


def load_layout(name: str) -> str:
    """Grid text for a built-in layout name or a file path."""
    if name in LAYOUTS:
        return LAYOUTS[name]
    return Path(name).read_text()


def main(text: str) -> int:
    """Solve a grid and open the viewer on it."""
    try:
        solution = solve(text)
    except PipeLoopError as e:
        print(f"ERROR: {e}")
        return 1

    LoopViewer(solution).run()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    sys.exit(main(load_layout(sys.argv[1] if len(sys.argv) > 1 else "noisy")))
