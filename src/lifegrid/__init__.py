"""Conway's Game of Life on a fixed-size bounded grid."""

__version__ = "0.1.0"

from .core.cell import Cell, CellState
from .core.grid import Grid, InvalidConfiguration
from .core.seeds import Seed, SeedLibrary
from .core.simulation import Simulation, SimulationConfig

__all__ = [
    "Cell",
    "CellState",
    "Grid",
    "InvalidConfiguration",
    "Seed",
    "SeedLibrary",
    "Simulation",
    "SimulationConfig",
]
