"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from ..core.grid import Grid, InvalidConfiguration
from ..core.seeds import SeedLibrary
from ..core.simulation import Simulation, SimulationConfig, create_grid
from .console import ConsoleRenderer, render_neighbor_counts

logger = logging.getLogger(__name__)

DEFAULT_RANDOM_SIZE = 50

START_PROMPT = "\nPress Enter to begin the game of life\nbeginning with generation 0, displayed above..."


class LifeCLI:
    """Runs simulations from the command line."""

    def __init__(self, renderer: Optional[ConsoleRenderer] = None, seed_dir: Optional[str] = None) -> None:
        """Initialize CLI interface.

        Args:
            renderer: Console renderer for frames (defaults to stdout)
            seed_dir: Optional directory of extra seed files
        """
        self.seed_library = SeedLibrary()
        self.renderer = renderer or ConsoleRenderer()

        if seed_dir:
            loaded = self.seed_library.load_directory(seed_dir)
            logger.debug("Loaded %d seeds from %s", len(loaded), seed_dir)

    def run_simulation(
        self,
        config: SimulationConfig,
        draw: bool = True,
        wait: bool = False,
    ) -> Tuple[int, str, dict, Grid]:
        """Run a simulation described by a configuration.

        Args:
            config: Simulation configuration
            draw: Render every generation
            wait: Prompt before the first generation is advanced

        Returns:
            Tuple of (final_generation, finish_reason, statistics, grid)
        """
        grid = create_grid(config, self.seed_library)
        simulation = Simulation(grid, config)
        initial_population = simulation.population

        def draw_generation(sim: Simulation) -> None:
            self.renderer.draw(sim.grid, self._status_line(sim))

        if draw:
            draw_generation(simulation)
        if wait:
            self.renderer.prompt(START_PROMPT)

        final_generation, reason = simulation.run(on_generation=draw_generation if draw else None)

        stats = simulation.get_statistics()
        stats["initial_population"] = initial_population
        return final_generation, reason, stats, grid

    @staticmethod
    def _status_line(simulation: Simulation) -> str:
        return f"Generation {simulation.generation}  Population {simulation.population}"

    def list_seeds(self) -> None:
        """List available seeds by category."""
        print("Available seeds:")
        for category, names in self.seed_library.get_seeds_by_category().items():
            print(f"\n{category}:")
            for name in names:
                seed = self.seed_library.get_seed(name)
                if seed is None:
                    continue
                print(f"  {seed.name}: {seed.width}x{seed.height}, {seed.population} cells")
                if seed.description:
                    print(f"    {seed.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lifegrid",
        description="Run Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Watch the default seed, pausing before the first generation
  lifegrid --wait

  # Glider centered on a 20x20 grid, stopping when it repeats
  lifegrid --seed Glider -W 20 -H 20 --stop-on-cycle

  # Random 40x80 grid with 25% population for 500 generations
  lifegrid --random -W 40 -H 80 -p 0.25 -m 500

  # Seed from a file, no animation, just the result
  lifegrid --seed my_seed.txt --until-stable --quiet
        """,
    )

    # Seed configuration
    parser.add_argument(
        "-s",
        "--seed",
        type=str,
        default="Default",
        help="Built-in seed name or path to a .txt/.json seed file (default: Default)",
    )
    parser.add_argument("--random", action="store_true", help="Start from a random seed instead of --seed")
    parser.add_argument("--seed-dir", type=str, help="Directory of additional seed files to add to the library")
    parser.add_argument(
        "-W", "--width", type=int, help=f"Grid rows (pads the seed; random default: {DEFAULT_RANDOM_SIZE})"
    )
    parser.add_argument(
        "-H", "--height", type=int, help=f"Grid columns (pads the seed; random default: {DEFAULT_RANDOM_SIZE})"
    )
    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.3,
        help="Random seed population rate 0.0-1.0 (default: 0.3)",
    )
    parser.add_argument("--random-seed", type=int, help="RNG seed for reproducible random grids")

    # Simulation configuration
    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=0,
        help="Generations to simulate, 0 for no limit (default: 0)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=0.4,
        help="Seconds to display each generation (default: 0.4)",
    )
    parser.add_argument("--until-stable", action="store_true", help="Stop when no cell changes")
    parser.add_argument("--stop-on-cycle", action="store_true", help="Stop when a previous state repeats")
    parser.add_argument("--stop-on-extinction", action="store_true", help="Stop when every cell is dead")

    # Output configuration
    parser.add_argument("--wait", action="store_true", help="Wait for Enter before the first generation")
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the screen between generations")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not draw generations, only print results")
    parser.add_argument(
        "--show-neighbors", action="store_true", help="Print living-neighbour counts of the final grid"
    )
    parser.add_argument("--list-seeds", action="store_true", help="List all available seeds and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width is not None and args.width <= 0:
        errors.append("Width must be positive")

    if args.height is not None and args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.max_generations < 0:
        errors.append("Max generations must not be negative")

    if args.delay < 0:
        errors.append("Delay must not be negative")

    if args.seed_dir and not os.path.isdir(args.seed_dir):
        errors.append(f"Seed directory '{args.seed_dir}' does not exist")

    stops = args.max_generations or args.until_stable or args.stop_on_cycle or args.stop_on_extinction
    if args.quiet and not stops and not args.list_seeds:
        errors.append("--quiet needs --max-generations or a stop condition")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a simulation configuration from parsed arguments."""
    width, height = args.width, args.height
    if args.random:
        width = width or DEFAULT_RANDOM_SIZE
        height = height or DEFAULT_RANDOM_SIZE

    return SimulationConfig(
        seed=None if args.random else args.seed,
        width=width,
        height=height,
        population_rate=args.population,
        random_seed=args.random_seed,
        max_generations=args.max_generations or None,
        delay=0.0 if args.quiet else args.delay,
        stop_when_stable=args.until_stable,
        stop_on_cycle=args.stop_on_cycle,
        stop_on_extinction=args.stop_on_extinction,
    )


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "cycle":
        return f"Cycle detected (length {stats['cycle_length']})"
    if reason == "stable":
        return "Stable (no cells changed)"
    if reason == "extinction":
        return "Extinction (all cells died)"
    if reason == "stopped":
        return "Stopped"
    return "Reached generation limit"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool = False) -> None:
    """Print simulation results."""
    print(f"\nFinished after {final_generation} generations: {format_finish_reason(reason, stats)}")
    print(f"Population: {stats['initial_population']} -> {stats['population']}")

    if verbose:
        width, height = stats["grid_size"]
        print(f"Grid: {width}x{height}, density {stats['population_density']:.2%}")
        print(f"Recent populations: {stats['population_history'][-10:]}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if not validate_args(args):
        return 1

    try:
        cli = LifeCLI(ConsoleRenderer(clear_screen=not args.no_clear), seed_dir=args.seed_dir)

        if args.list_seeds:
            cli.list_seeds()
            return 0

        final_generation, reason, stats, grid = cli.run_simulation(
            config_from_args(args), draw=not args.quiet, wait=args.wait
        )

        print_results(final_generation, reason, stats, args.verbose)
        if args.show_neighbors:
            print("\nLiving neighbours:")
            print(render_neighbor_counts(grid), end="")

        return 0

    except InvalidConfiguration as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
