"""Tests for the Cell class."""

from lifegrid.core.cell import Cell, CellState


class TestCell:
    """Test cases for the Cell class."""

    def test_default_is_dead(self):
        """Test that a default cell is dead with a matching next state."""
        cell = Cell()
        assert cell.current_state is CellState.DEAD
        assert cell.next_state is CellState.DEAD
        assert not cell.is_alive

    def test_explicit_state(self):
        """Test construction with an explicit state."""
        cell = Cell(CellState.ALIVE)
        assert cell.current_state is CellState.ALIVE
        assert cell.next_state is CellState.ALIVE
        assert cell.is_alive

    def test_stage_next_leaves_current_state(self):
        """Test staging does not alter the current state."""
        cell = Cell(CellState.ALIVE)
        cell.stage_next(CellState.DEAD)

        assert cell.current_state is CellState.ALIVE
        assert cell.next_state is CellState.DEAD

    def test_commit(self):
        """Test commit promotes the staged state."""
        cell = Cell()
        cell.stage_next(CellState.ALIVE)
        cell.commit()

        assert cell.current_state is CellState.ALIVE
        assert cell.next_state is CellState.ALIVE

    def test_commit_is_idempotent(self):
        """Test committing twice gives the same result."""
        cell = Cell(CellState.ALIVE)
        cell.stage_next(CellState.DEAD)
        cell.commit()
        cell.commit()

        assert cell.current_state is CellState.DEAD
        assert cell.next_state is CellState.DEAD
