"""Seed matrices for initial Game of Life configurations."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .grid import Grid, InvalidConfiguration, check_dimension, seed_to_array

logger = logging.getLogger(__name__)

# Characters tolerated between cell digits in text seed files.
_TEXT_SEPARATORS = set(" \t,{}[]")


class Seed:
    """A named rectangular 0/1 matrix describing an initial grid."""

    def __init__(self, name: str, matrix: Any, description: str = "") -> None:
        """Initialize a seed.

        Args:
            name: Seed name
            matrix: Rectangular nested sequence or 2-D array; 1 is alive
            description: Optional description

        Raises:
            InvalidConfiguration: If the matrix is empty, jagged or not 2-D
        """
        self.name = name
        self.matrix = (seed_to_array(matrix) == 1).astype(np.int8)
        self.description = description

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[str], description: str = "") -> "Seed":
        """Create a seed from strings of '0' and '1' characters, one per row."""
        return cls(name, [[1 if ch == "1" else 0 for ch in row] for row in rows], description)

    @classmethod
    def random(
        cls,
        width: int,
        height: int,
        probability: float = 0.3,
        rng_seed: Optional[int] = None,
        name: str = "Random",
    ) -> "Seed":
        """Create a randomly populated seed.

        Args:
            width: Number of rows
            height: Number of columns
            probability: Chance each cell will be alive (0.0 to 1.0)
            rng_seed: Optional seed for reproducible output

        Raises:
            InvalidConfiguration: If the probability or dimensions are invalid
        """
        if not 0.0 <= probability <= 1.0:
            raise InvalidConfiguration(f"Population rate must be between 0.0 and 1.0, got {probability}")
        width = check_dimension("width", width)
        height = check_dimension("height", height)

        rng = np.random.default_rng(rng_seed)
        matrix = (rng.random((width, height)) < probability).astype(np.int8)
        return cls(name, matrix, f"Random {width}x{height} seed ({probability:.0%} alive)")

    @property
    def width(self) -> int:
        """Number of rows."""
        return int(self.matrix.shape[0])

    @property
    def height(self) -> int:
        """Number of columns."""
        return int(self.matrix.shape[1])

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(self.matrix.sum())

    def to_grid(self) -> Grid:
        """Build a fresh grid from this seed."""
        return Grid.from_seed(self.matrix)

    def place(self, width: int, height: int, row: Optional[int] = None, col: Optional[int] = None) -> "Seed":
        """Return a larger seed with this one stamped into it.

        Args:
            width: Rows of the new seed
            height: Columns of the new seed
            row: Top row offset (centered when omitted)
            col: Left column offset (centered when omitted)

        Raises:
            InvalidConfiguration: If this seed does not fit at the requested offset
        """
        if row is None:
            row = (width - self.width) // 2
        if col is None:
            col = (height - self.height) // 2

        if row < 0 or col < 0 or row + self.width > width or col + self.height > height:
            raise InvalidConfiguration(
                f"Seed '{self.name}' ({self.width}x{self.height}) does not fit in a "
                f"{width}x{height} grid at ({row}, {col})"
            )

        matrix = np.zeros((width, height), dtype=np.int8)
        matrix[row : row + self.width, col : col + self.height] = self.matrix
        return Seed(self.name, matrix, self.description)

    def to_dict(self) -> Dict[str, Any]:
        """Convert seed to dictionary for serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "cells": self.matrix.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Seed":
        """Create seed from dictionary."""
        return cls(data["name"], data["cells"], data.get("description", ""))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seed):
            return False
        return self.name == other.name and np.array_equal(self.matrix, other.matrix)

    def __repr__(self) -> str:
        return f"Seed({self.name!r}, {self.width}x{self.height}, population={self.population})"


def parse_seed_text(text: str) -> List[List[int]]:
    """Parse a text seed into rows of 0/1 integers.

    One row per line. Blank lines and lines starting with '#' are skipped,
    and spaces, commas and brackets between digits are ignored.

    Raises:
        InvalidConfiguration: If a line contains anything but cell digits and separators
    """
    rows = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        row = []
        for ch in line:
            if ch in "01":
                row.append(int(ch))
            elif ch not in _TEXT_SEPARATORS:
                raise InvalidConfiguration(f"Line {lineno}: unexpected character {ch!r} in seed")

        if row:
            rows.append(row)

    return rows


def load_seed_file(path: Union[str, Path]) -> Seed:
    """Load a seed from a .json or plain text file.

    JSON files hold either a bare matrix or an object with ``name``,
    ``description`` and ``cells``. Any other suffix is read as text.

    Raises:
        InvalidConfiguration: If the file cannot be read or is malformed
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise InvalidConfiguration(f"Cannot read seed file {path}: {e}") from e

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except ValueError as e:
            raise InvalidConfiguration(f"Invalid JSON in seed file {path}: {e}") from e

        if isinstance(data, dict):
            try:
                seed = Seed.from_dict(data)
            except KeyError as e:
                raise InvalidConfiguration(f"Seed file {path} is missing key {e}") from e
        else:
            seed = Seed(path.stem, data)
    else:
        seed = Seed(path.stem, parse_seed_text(text))

    logger.debug("Loaded seed %r (%dx%d) from %s", seed.name, seed.width, seed.height, path)
    return seed


def save_seed_file(seed: Seed, path: Union[str, Path]) -> None:
    """Save a seed as JSON."""
    with open(path, "w") as f:
        json.dump(seed.to_dict(), f, indent=2)


DEFAULT_SEED_ROWS = [
    "0000000000000000000000000000000000",
    "0000011100011100000000000000001110",
    "0000000000000000000000000000000111",
    "0001000010100001000000000000000000",
    "0001000010100001000000000000000000",
    "0001000010100001000110000000000000",
    "0000011100011100001111000000000000",
    "0000000000000000001101100000000000",
    "0000011100011100000011000000000000",
    "0001000010100001000000000000000000",
    "0001000010100001000000000000000000",
    "0001000010100001000000000000000000",
    "0000000000000000000011000000000000",
    "0000011100011100000100100000000000",
    "0000000000000000000011000000000011",
    "0000000000000000000000000000000001",
    "0000000011100000000011000000001000",
    "0000000000000000000011000000001100",
]


class SeedLibrary:
    """Manages a collection of named seeds."""

    CATEGORIES = {
        "Demonstration": ["Default"],
        "Still Life": ["Block", "Beehive"],
        "Oscillators": ["Blinker", "Toad", "Beacon"],
        "Spaceships": ["Glider"],
        "Methuselahs": ["R-pentomino", "Diehard", "Acorn"],
    }

    def __init__(self) -> None:
        self._seeds: Dict[str, Seed] = {}
        self._load_builtin_seeds()

    def _load_builtin_seeds(self) -> None:
        """Load built-in seeds."""
        self.add_seed(Seed.from_rows("Default", DEFAULT_SEED_ROWS, "Half pulsars beside a growing cluster"))

        self.add_seed(Seed.from_rows("Block", ["11", "11"], "2x2 still life block"))
        self.add_seed(Seed.from_rows("Beehive", ["0110", "1001", "0110"], "Beehive still life"))

        self.add_seed(Seed.from_rows("Blinker", ["111"], "Period-2 oscillator"))
        self.add_seed(Seed.from_rows("Toad", ["0111", "1110"], "Period-2 oscillator"))
        self.add_seed(Seed.from_rows("Beacon", ["1100", "1000", "0001", "0011"], "Period-2 oscillator"))

        self.add_seed(Seed.from_rows("Glider", ["010", "001", "111"], "Smallest spaceship, period-4"))

        self.add_seed(Seed.from_rows("R-pentomino", ["011", "110", "010"], "Methuselah that stabilizes after 1103 generations"))
        self.add_seed(
            Seed.from_rows("Diehard", ["00000010", "11000000", "01000111"], "Dies after exactly 130 generations")
        )
        self.add_seed(
            Seed.from_rows("Acorn", ["0100000", "0001000", "1100111"], "Takes 5206 generations to stabilize")
        )

    def add_seed(self, seed: Seed) -> None:
        """Add a seed to the library, replacing any seed with the same name."""
        self._seeds[seed.name.lower()] = seed

    def get_seed(self, name: str) -> Optional[Seed]:
        """Get a seed by name, ignoring case.

        Returns:
            Seed instance or None if not found
        """
        return self._seeds.get(name.lower())

    def list_seeds(self) -> List[str]:
        """Get list of all seed names."""
        return [seed.name for seed in self._seeds.values()]

    def get_seeds_by_category(self) -> Dict[str, List[str]]:
        """Get seed names organized by category, with unknown names under 'Custom'."""
        categories: Dict[str, List[str]] = {cat: list(names) for cat, names in self.CATEGORIES.items()}
        categories["Custom"] = []

        builtin = {name.lower() for names in self.CATEGORIES.values() for name in names}
        for seed in self._seeds.values():
            if seed.name.lower() not in builtin:
                categories["Custom"].append(seed.name)

        return {cat: names for cat, names in categories.items() if names}

    def load_directory(self, directory: Union[str, Path]) -> List[Seed]:
        """Load every .json and .txt seed file in a directory.

        Files that fail to load are logged and skipped.

        Returns:
            Seeds that were added
        """
        loaded = []
        for filepath in sorted(Path(directory).iterdir()):
            if filepath.suffix.lower() not in (".json", ".txt"):
                continue
            try:
                seed = load_seed_file(filepath)
            except InvalidConfiguration as e:
                logger.warning("Failed to load seed from %s: %s", filepath.name, e)
                continue
            self.add_seed(seed)
            loaded.append(seed)
        return loaded

    def resolve(self, name_or_path: str) -> Seed:
        """Resolve a library name or a file path to a seed.

        Raises:
            InvalidConfiguration: If no seed with that name exists and the path is not a file
        """
        seed = self.get_seed(name_or_path)
        if seed is not None:
            return seed

        path = Path(name_or_path)
        if path.is_file():
            return load_seed_file(path)

        raise InvalidConfiguration(
            f"Unknown seed '{name_or_path}': not a built-in seed ({', '.join(self.list_seeds())}) or a readable file"
        )
