"""Tests for seeds and the seed library."""

import json

import numpy as np
import pytest

from lifegrid.core.cell import CellState
from lifegrid.core.grid import InvalidConfiguration
from lifegrid.core.seeds import (
    Seed,
    SeedLibrary,
    load_seed_file,
    parse_seed_text,
    save_seed_file,
)


class TestSeed:
    """Test cases for the Seed class."""

    def test_from_rows(self):
        """Test building a seed from row strings."""
        seed = Seed.from_rows("Glider", ["010", "001", "111"], "spaceship")
        assert seed.width == 3
        assert seed.height == 3
        assert seed.population == 5
        assert seed.description == "spaceship"

    def test_matrix_normalized(self):
        """Test non-one entries become dead."""
        seed = Seed("odd", [[2, 1], [0, 1]])
        assert seed.matrix.tolist() == [[0, 1], [0, 1]]

    def test_jagged_rejected(self):
        """Test a jagged matrix is rejected."""
        with pytest.raises(InvalidConfiguration):
            Seed("bad", [[1, 0], [1]])

    def test_to_grid(self):
        """Test grid creation from a seed."""
        grid = Seed.from_rows("L", ["10", "11"]).to_grid()
        assert grid.shape == (2, 2)
        assert grid.cell_state(0, 0) is CellState.ALIVE
        assert grid.cell_state(0, 1) is CellState.DEAD

    def test_random_reproducible(self):
        """Test random seeds with the same RNG seed match."""
        first = Seed.random(20, 30, 0.4, rng_seed=11)
        second = Seed.random(20, 30, 0.4, rng_seed=11)
        assert first.width == 20
        assert first.height == 30
        assert np.array_equal(first.matrix, second.matrix)

    def test_random_extremes(self):
        """Test probability 0 and 1 give empty and full seeds."""
        assert Seed.random(5, 5, 0.0).population == 0
        assert Seed.random(5, 5, 1.0).population == 25

    @pytest.mark.parametrize("width,height", [(2.5, 3), (3, True), (0, 3), (3, -1)])
    def test_random_invalid_dimensions(self, width, height):
        """Test non-integer or non-positive dimensions are rejected."""
        with pytest.raises(InvalidConfiguration):
            Seed.random(width, height, 0.5)

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_random_invalid_probability(self, probability):
        """Test out-of-range probabilities are rejected."""
        with pytest.raises(InvalidConfiguration):
            Seed.random(5, 5, probability)

    def test_place_centered(self):
        """Test a seed is centered by default."""
        placed = Seed.from_rows("Blinker", ["111"]).place(5, 5)
        assert placed.width == 5
        assert placed.height == 5
        assert placed.matrix[2].tolist() == [0, 1, 1, 1, 0]
        assert placed.population == 3

    def test_place_offset(self):
        """Test placement at an explicit offset."""
        placed = Seed.from_rows("Block", ["11", "11"]).place(4, 4, row=0, col=2)
        assert placed.matrix.tolist() == [[0, 0, 1, 1], [0, 0, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]

    def test_place_does_not_fit(self):
        """Test placing a seed outside the target raises."""
        block = Seed.from_rows("Block", ["11", "11"])
        with pytest.raises(InvalidConfiguration):
            block.place(1, 5)
        with pytest.raises(InvalidConfiguration):
            block.place(4, 4, row=3, col=0)

    def test_dict_serialization(self):
        """Test conversion to and from a dictionary."""
        seed = Seed.from_rows("Toad", ["0111", "1110"], "oscillator")
        data = seed.to_dict()
        assert data == {"name": "Toad", "description": "oscillator", "cells": [[0, 1, 1, 1], [1, 1, 1, 0]]}
        assert Seed.from_dict(data) == seed


class TestSeedFiles:
    """Test seed file parsing and loading."""

    def test_parse_text_with_separators_and_comments(self):
        """Test comments, blank lines and separators are ignored."""
        text = "# a comment\n\n{ 0, 1, 0,},\n{ 1, 1, 1,},\n"
        assert parse_seed_text(text) == [[0, 1, 0], [1, 1, 1]]

    def test_parse_text_rejects_other_characters(self):
        """Test unexpected characters are reported."""
        with pytest.raises(InvalidConfiguration, match="Line 2"):
            parse_seed_text("010\n0X0\n")

    def test_load_text_file(self, tmp_path):
        """Test loading a text seed uses the file stem as name."""
        path = tmp_path / "spark.txt"
        path.write_text("010\n111\n")

        seed = load_seed_file(path)
        assert seed.name == "spark"
        assert seed.matrix.tolist() == [[0, 1, 0], [1, 1, 1]]

    def test_load_json_matrix(self, tmp_path):
        """Test loading a bare JSON matrix."""
        path = tmp_path / "pair.json"
        path.write_text(json.dumps([[1, 1], [0, 0]]))

        seed = load_seed_file(path)
        assert seed.name == "pair"
        assert seed.population == 2

    def test_save_and_load_json(self, tmp_path):
        """Test a saved seed keeps its name and description."""
        path = tmp_path / "beacon.json"
        seed = Seed.from_rows("Beacon", ["1100", "1000", "0001", "0011"], "Period-2 oscillator")
        save_seed_file(seed, path)

        loaded = load_seed_file(path)
        assert loaded == seed
        assert loaded.description == "Period-2 oscillator"

    def test_load_jagged_text_file(self, tmp_path):
        """Test a jagged text seed is rejected."""
        path = tmp_path / "jagged.txt"
        path.write_text("010\n11\n")

        with pytest.raises(InvalidConfiguration):
            load_seed_file(path)

    def test_load_invalid_json(self, tmp_path):
        """Test malformed JSON is reported as configuration error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(InvalidConfiguration):
            load_seed_file(path)

    def test_load_json_missing_cells(self, tmp_path):
        """Test a JSON object without cells is rejected."""
        path = tmp_path / "nocells.json"
        path.write_text(json.dumps({"name": "nothing"}))

        with pytest.raises(InvalidConfiguration):
            load_seed_file(path)

    def test_load_json_mixed_nesting(self, tmp_path):
        """Test a JSON matrix with nested rows is rejected."""
        path = tmp_path / "nested.json"
        path.write_text(json.dumps([[1, [0, 1]], [0, 0]]))

        with pytest.raises(InvalidConfiguration):
            load_seed_file(path)

    def test_load_json_string_rows(self, tmp_path):
        """Test a JSON list of row strings is rejected instead of read as dead cells."""
        path = tmp_path / "strings.json"
        path.write_text(json.dumps(["010", "111"]))

        with pytest.raises(InvalidConfiguration):
            load_seed_file(path)

    def test_load_missing_file(self, tmp_path):
        """Test a missing file is reported as configuration error."""
        with pytest.raises(InvalidConfiguration):
            load_seed_file(tmp_path / "missing.txt")


class TestSeedLibrary:
    """Test cases for the SeedLibrary class."""

    def test_builtin_seeds(self):
        """Test the built-in seeds are present."""
        library = SeedLibrary()
        names = library.list_seeds()
        for name in ["Default", "Block", "Blinker", "Glider", "Acorn"]:
            assert name in names

    def test_default_seed(self):
        """Test the default demonstration seed."""
        seed = SeedLibrary().get_seed("Default")
        assert seed.width == 18
        assert seed.height == 34
        assert seed.population == 85

    def test_get_seed_ignores_case(self):
        """Test name lookup is case-insensitive."""
        library = SeedLibrary()
        assert library.get_seed("glider").name == "Glider"
        assert library.get_seed("missing") is None

    def test_resolve_name_and_path(self, tmp_path):
        """Test resolving library names and file paths."""
        library = SeedLibrary()
        assert library.resolve("Block").name == "Block"

        path = tmp_path / "dot.txt"
        path.write_text("1\n")
        assert library.resolve(str(path)).name == "dot"

    def test_resolve_unknown(self):
        """Test resolving an unknown seed raises."""
        with pytest.raises(InvalidConfiguration, match="Unknown seed"):
            SeedLibrary().resolve("no-such-seed")

    def test_load_directory(self, tmp_path):
        """Test loading a directory skips broken and unrelated files."""
        (tmp_path / "good.txt").write_text("11\n11\n")
        (tmp_path / "bad.txt").write_text("1?\n")
        (tmp_path / "notes.md").write_text("ignored")

        library = SeedLibrary()
        loaded = library.load_directory(tmp_path)

        assert [seed.name for seed in loaded] == ["good"]
        assert library.get_seed("good") is not None
        assert library.get_seeds_by_category()["Custom"] == ["good"]

    def test_categories(self):
        """Test built-in seeds are categorized without a Custom group."""
        categories = SeedLibrary().get_seeds_by_category()
        assert categories["Oscillators"] == ["Blinker", "Toad", "Beacon"]
        assert "Custom" not in categories
