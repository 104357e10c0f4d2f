#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Grid, Simulation, SimulationConfig, SeedLibrary
from lifegrid.frontends.console import render


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    library = SeedLibrary()
    glider = library.get_seed("Glider")

    # Center the glider on a 12x12 grid
    grid = glider.place(12, 12).to_grid()
    simulation = Simulation(grid, SimulationConfig(max_generations=10, delay=0, stop_on_extinction=True))

    print("Initial state:")
    print(render(grid, dead="."))

    def show(sim):
        print(f"Generation {sim.generation} (population {sim.population}):")
        print(render(sim.grid, dead="."))

    final_generation, reason = simulation.run(on_generation=show)
    print(f"Stopped at generation {final_generation}: {reason}")

    # A blank grid built from dimensions stays blank
    empty = Grid(3, 3)
    empty.advance()
    print(f"Empty grid population after one generation: {empty.population}")


if __name__ == "__main__":
    main()
