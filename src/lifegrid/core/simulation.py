"""Generation loop driving a Game of Life grid."""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Optional, Tuple

import numpy as np

from .grid import Grid, InvalidConfiguration
from .seeds import Seed, SeedLibrary

logger = logging.getLogger(__name__)

STOP_REASONS = ("max_generations", "stable", "cycle", "extinction", "stopped")


@dataclass
class SimulationConfig:
    """Configuration for a simulation run.

    ``seed`` is a library name or a file path; ``None`` requests a random
    seed of ``width`` x ``height``. ``max_generations`` of ``None`` runs
    until another stop condition triggers, or forever.
    """

    seed: Optional[str] = "Default"
    width: Optional[int] = None
    height: Optional[int] = None
    population_rate: float = 0.3
    random_seed: Optional[int] = None
    max_generations: Optional[int] = None
    delay: float = 0.4
    stop_when_stable: bool = False
    stop_on_cycle: bool = False
    stop_on_extinction: bool = False

    def validate(self) -> None:
        """Check the configuration.

        Raises:
            InvalidConfiguration: Listing every problem found
        """
        errors = []

        for name in ("width", "height"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                errors.append(f"{name} must be an integer")
            elif value <= 0:
                errors.append(f"{name} must be positive")

        if self.seed is None and (self.width is None or self.height is None):
            errors.append("a random seed needs both width and height")
        if not 0.0 <= self.population_rate <= 1.0:
            errors.append("population rate must be between 0.0 and 1.0")
        if self.max_generations is not None and self.max_generations <= 0:
            errors.append("max generations must be positive")
        if self.delay < 0:
            errors.append("delay must not be negative")

        if errors:
            raise InvalidConfiguration("Invalid simulation configuration: " + "; ".join(errors))


def create_grid(config: SimulationConfig, library: Optional[SeedLibrary] = None) -> Grid:
    """Build the initial grid described by a configuration.

    A named or file seed is centered in a larger grid when ``width`` or
    ``height`` exceeds its own size.
    """
    config.validate()

    if config.seed is None:
        seed = Seed.random(config.width, config.height, config.population_rate, config.random_seed)
    else:
        seed = (library or SeedLibrary()).resolve(config.seed)
        width = config.width or seed.width
        height = config.height or seed.height
        if (width, height) != (seed.width, seed.height):
            seed = seed.place(width, height)

    logger.debug("Initial seed %r: %dx%d, %d living cells", seed.name, seed.width, seed.height, seed.population)
    return seed.to_grid()


class Simulation:
    """Drives a grid generation by generation and decides when to stop."""

    def __init__(self, grid: Grid, config: Optional[SimulationConfig] = None) -> None:
        """Initialize the simulation.

        Args:
            grid: Grid to advance
            config: Stop conditions and pacing, defaults to SimulationConfig()
        """
        self.grid = grid
        self.config = config or SimulationConfig()
        self.config.validate()

        self._generation = 0
        self._changed_cells = 0
        self._cycle_length = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[Tuple[bytes, int]] = deque(maxlen=1000)
        self._seen_states: Dict[bytes, int] = {}

        self._population_history.append(self.population)
        self._record_state(self.grid.to_array())

    @property
    def generation(self) -> int:
        """Number of generations advanced so far."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """Population counts of the most recent generations."""
        return list(self._population_history)

    @property
    def changed_cells(self) -> int:
        """Number of cells that changed state in the last step."""
        return self._changed_cells

    @property
    def cycle_length(self) -> int:
        """Period of the first detected repetition (0 if none)."""
        return self._cycle_length

    def _record_state(self, cells: np.ndarray) -> None:
        key = cells.tobytes()

        if key in self._seen_states:
            if not self._cycle_length:
                self._cycle_length = self._generation - self._seen_states[key]
                logger.debug("Cycle of length %d detected at generation %d", self._cycle_length, self._generation)
            return

        # Forget the oldest state once the history window is full.
        if len(self._state_history) == self._state_history.maxlen:
            old_key, old_generation = self._state_history[0]
            if self._seen_states.get(old_key) == old_generation:
                del self._seen_states[old_key]

        self._state_history.append((key, self._generation))
        self._seen_states[key] = self._generation

    def step(self) -> None:
        """Advance the grid by one generation."""
        before = self.grid.to_array()
        self.grid.advance()
        after = self.grid.to_array()

        self._generation += 1
        self._changed_cells = int(np.count_nonzero(before != after))
        self._population_history.append(int(after.sum()))
        self._record_state(after)

    def _stop_reason(self) -> Optional[str]:
        if self.config.stop_on_extinction and self._population_history[-1] == 0:
            return "extinction"
        if self.config.stop_when_stable and self._changed_cells == 0:
            return "stable"
        if self.config.stop_on_cycle and self._cycle_length:
            return "cycle"
        return None

    def run(
        self,
        on_generation: Optional[Callable[["Simulation"], Any]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Tuple[int, str]:
        """Run generations until a stop condition is met.

        Args:
            on_generation: Called after every generation, typically to render;
                returning False stops the run
            sleep: Pacing function called with config.delay between generations

        Returns:
            Tuple of (final_generation, reason) where reason is one of
            'max_generations', 'stable', 'cycle', 'extinction', 'stopped'
        """
        limit = self.config.max_generations
        reason = "max_generations"

        while limit is None or self._generation < limit:
            self.step()

            if on_generation is not None and on_generation(self) is False:
                reason = "stopped"
                break

            stop = self._stop_reason()
            if stop is not None:
                reason = stop
                break

            if self.config.delay > 0:
                sleep(self.config.delay)

        logger.debug("Simulation finished at generation %d: %s", self._generation, reason)
        return self._generation, reason

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics."""
        return {
            "generation": self._generation,
            "population": self.population,
            "population_history": self.population_history,
            "changed_cells": self._changed_cells,
            "cycle_length": self._cycle_length,
            "grid_size": self.grid.shape,
            "population_density": self.population / (self.grid.width * self.grid.height),
        }
