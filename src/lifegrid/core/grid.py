"""Grid data structure and generation engine for the Game of Life."""

import logging
from typing import Any, List, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell, CellState

logger = logging.getLogger(__name__)

# Relative (row, col) positions of the eight Moore neighbours.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)

_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class InvalidConfiguration(ValueError):
    """Raised when a grid, seed or simulation is configured with unusable input."""


def check_dimension(name: str, value: Any) -> int:
    """Return a grid dimension as int, rejecting non-integers and non-positive values."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be positive, got {value}")
    return int(value)


def seed_to_array(matrix: Any) -> np.ndarray:
    """Validate a seed matrix and return it as a 2-D numpy array.

    Args:
        matrix: Nested sequence or numpy array of cell values

    Returns:
        2-D array with the same shape as the input

    Raises:
        InvalidConfiguration: If the matrix is empty, jagged or not 2-D
    """
    if isinstance(matrix, np.ndarray):
        arr = matrix
    else:
        try:
            source_rows = list(matrix)
            if any(isinstance(row, str) for row in source_rows):
                raise InvalidConfiguration("Seed rows must be sequences of cell values, not strings")
            rows = [list(row) for row in source_rows]
        except TypeError as e:
            raise InvalidConfiguration("Seed must be a two-dimensional matrix") from e

        if not rows:
            raise InvalidConfiguration("Seed matrix has no rows")

        lengths = sorted({len(row) for row in rows})
        if len(lengths) > 1:
            raise InvalidConfiguration(f"Seed matrix is not rectangular (row lengths {lengths})")

        try:
            arr = np.array(rows)
        except ValueError as e:
            raise InvalidConfiguration("Seed matrix is not rectangular") from e

        if arr.dtype == object and any(isinstance(value, (list, tuple, np.ndarray)) for value in arr.flat):
            raise InvalidConfiguration("Seed matrix is not rectangular")

    if arr.ndim != 2:
        raise InvalidConfiguration(f"Seed matrix must be two-dimensional, got {arr.ndim} dimensions")
    if arr.size == 0:
        raise InvalidConfiguration("Seed matrix has no cells")

    return arr


class Grid:
    """Fixed-size rectangular grid of cells with bounded (non-wrapping) edges.

    Cells are indexed ``[row, col]`` with ``0 <= row < width`` and
    ``0 <= col < height``. A generation is advanced in two passes: every
    cell's next state is computed from the current states, then all cells
    commit together.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a grid with every cell dead.

        Args:
            width: Number of rows
            height: Number of columns

        Raises:
            InvalidConfiguration: If either dimension is not a positive integer
        """
        self._width = check_dimension("width", width)
        self._height = check_dimension("height", height)
        self._cells: List[List[Cell]] = [[Cell() for _ in range(self._height)] for _ in range(self._width)]

    @classmethod
    def from_seed(cls, matrix: Any) -> "Grid":
        """Create a grid from a seed matrix.

        The matrix shape defines the grid dimensions. Entries equal to 1 are
        alive, anything else is dead.

        Args:
            matrix: Rectangular nested sequence or 2-D numpy array

        Returns:
            New grid

        Raises:
            InvalidConfiguration: If the matrix is empty, jagged or not 2-D
        """
        arr = seed_to_array(matrix)
        alive = np.asarray(arr == 1, dtype=bool)

        width, height = arr.shape
        grid = cls(width, height)
        for row, col in zip(*np.nonzero(alive)):
            grid._cells[int(row)][int(col)] = Cell(CellState.ALIVE)

        logger.debug("Created %dx%d grid from seed with %d living cells", width, height, grid.population)
        return grid

    @property
    def width(self) -> int:
        """Number of rows."""
        return self._width

    @property
    def height(self) -> int:
        """Number of columns."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def population(self) -> int:
        """Number of living cells."""
        return sum(cell.is_alive for row in self._cells for cell in row)

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self._width and 0 <= col < self._height):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self._width}x{self._height} grid")

    def cell_state(self, row: int, col: int) -> CellState:
        """Get the current state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        self._check_bounds(row, col)
        return self._cells[row][col].current_state

    def count_living_neighbors(self, row: int, col: int) -> int:
        """Count living neighbours of a cell.

        Positions outside the grid are skipped, so edge and corner cells
        have fewer than eight neighbours.

        Args:
            row: Row index
            col: Column index

        Returns:
            Number of living neighbours (0-8)
        """
        self._check_bounds(row, col)

        count = 0
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self._width and 0 <= nc < self._height:
                if self._cells[nr][nc].is_alive:
                    count += 1
        return count

    def apply_rules(self, row: int, col: int) -> None:
        """Stage the next state of a cell from its current state and neighbours.

        - Live cell with 2 or 3 neighbours survives
        - Dead cell with exactly 3 neighbours becomes alive
        - Every other cell is dead in the next generation
        """
        count = self.count_living_neighbors(row, col)
        cell = self._cells[row][col]

        if cell.is_alive:
            alive_next = count in (2, 3)
        else:
            alive_next = count == 3

        cell.stage_next(CellState.ALIVE if alive_next else CellState.DEAD)

    def advance(self) -> None:
        """Advance the grid by exactly one generation."""
        # Compute pass: only next states are written.
        for row in range(self._width):
            for col in range(self._height):
                self.apply_rules(row, col)

        # Commit pass.
        for cells in self._cells:
            for cell in cells:
                cell.commit()

    def to_array(self) -> np.ndarray:
        """Snapshot of current states as an int8 array of shape (width, height)."""
        return np.array(
            [[1 if cell.is_alive else 0 for cell in cells] for cells in self._cells],
            dtype=np.int8,
        )

    def neighbor_counts(self) -> np.ndarray:
        """Count living neighbours for all cells with a torch convolution.

        Zero padding keeps the edges bounded, matching count_living_neighbors().

        Returns:
            int8 array of shape (width, height)
        """
        cells = torch.from_numpy(self.to_array().astype(np.float32)).unsqueeze(0).unsqueeze(0)
        counts = F.conv2d(cells, _NEIGHBOR_KERNEL, padding=1)
        return counts[0, 0].numpy().astype(np.int8)

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same shape and current states."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self.to_array(), other.to_array())

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, population={self.population})"
