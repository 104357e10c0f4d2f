"""Plain-text rendering of a grid for terminals."""

import sys
from typing import Optional, TextIO

from ..core.cell import CellState
from ..core.grid import Grid

ALIVE_GLYPH = "X"
DEAD_GLYPH = " "

# ANSI: clear screen and move the cursor home.
CLEAR_SCREEN = "\033[2J\033[H"


def render(grid: Grid, alive: str = ALIVE_GLYPH, dead: str = DEAD_GLYPH) -> str:
    """Render a grid as text.

    Rows are emitted in order 0..width-1, each terminated by a newline.
    """
    lines = []
    for row in range(grid.width):
        glyphs = [alive if grid.cell_state(row, col) is CellState.ALIVE else dead for col in range(grid.height)]
        lines.append("".join(glyphs) + "\n")
    return "".join(lines)


def render_neighbor_counts(grid: Grid) -> str:
    """Render living-neighbour counts, with '.' for zero."""
    counts = grid.neighbor_counts()
    return "".join("".join(str(n) if n else "." for n in row) + "\n" for row in counts)


class ConsoleRenderer:
    """Draws successive generations to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None, clear_screen: bool = True) -> None:
        """Initialize the renderer.

        Args:
            stream: Output stream (defaults to sys.stdout at draw time)
            clear_screen: Clear the terminal before each frame
        """
        self._stream = stream
        self.clear_screen = clear_screen

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def draw(self, grid: Grid, footer: str = "") -> None:
        """Write one frame, optionally followed by a status line."""
        if self.clear_screen:
            self.stream.write(CLEAR_SCREEN)
        self.stream.write(render(grid))
        if footer:
            self.stream.write(footer + "\n")
        self.stream.flush()

    def prompt(self, message: str) -> None:
        """Show a message and wait for Enter."""
        self.stream.write(message)
        self.stream.flush()
        input()
