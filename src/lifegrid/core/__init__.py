"""Core cellular automaton logic."""

from .cell import Cell, CellState
from .grid import Grid, InvalidConfiguration
from .seeds import Seed, SeedLibrary, load_seed_file, save_seed_file
from .simulation import Simulation, SimulationConfig, create_grid

__all__ = [
    "Cell",
    "CellState",
    "Grid",
    "InvalidConfiguration",
    "Seed",
    "SeedLibrary",
    "load_seed_file",
    "save_seed_file",
    "Simulation",
    "SimulationConfig",
    "create_grid",
]
