"""Single cell of the Game of Life grid."""

from enum import Enum


class CellState(Enum):
    """Binary state of a cell."""

    DEAD = 0
    ALIVE = 1


class Cell:
    """A cell holding its current state and a staged next state.

    The next state is only meaningful between the compute and commit
    phases of a generation. Outside that window it equals the current state.
    """

    def __init__(self, state: CellState = CellState.DEAD) -> None:
        """Initialize a cell.

        Args:
            state: Initial state, dead by default
        """
        self.current_state = state
        self.next_state = state

    @property
    def is_alive(self) -> bool:
        """Whether the cell is currently alive."""
        return self.current_state is CellState.ALIVE

    def stage_next(self, state: CellState) -> None:
        """Stage the state for the next generation without changing the current one."""
        self.next_state = state

    def commit(self) -> None:
        """Promote the staged state to the current state."""
        self.current_state = self.next_state

    def __repr__(self) -> str:
        return f"Cell({self.current_state.name}, next={self.next_state.name})"
