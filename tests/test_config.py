"""Tests for solver options and analysis persistence."""

import dataclasses
import json

import numpy as np
import pytest

from thermosim.core.config import (
    DEFAULT_OPTIONS,
    LEGACY_OPTIONS,
    AnalysisRecord,
    ProjectMeta,
    SolverOptions,
    load_analysis_json,
    save_analysis_json,
)
from thermosim.core.saturation import LookupMode
from thermosim.core.substances import get_substance
from thermosim.cycle.solver import compute_cycle


class TestSolverOptions:
    def test_defaults(self):
        assert DEFAULT_OPTIONS.lookup is LookupMode.LINEAR
        assert DEFAULT_OPTIONS.strict_units
        assert not DEFAULT_OPTIONS.corrected_isothermal_heat
        assert DEFAULT_OPTIONS.vapor_cp == pytest.approx(2.0)

    def test_legacy(self):
        assert LEGACY_OPTIONS.lookup is LookupMode.NEAREST
        assert not LEGACY_OPTIONS.strict_units

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_OPTIONS.strict_units = False

    def test_with_changes(self):
        opts = DEFAULT_OPTIONS.with_changes(corrected_isothermal_heat=True)
        assert opts.corrected_isothermal_heat
        assert not DEFAULT_OPTIONS.corrected_isothermal_heat

    def test_dict_round_trip(self):
        opts = SolverOptions(lookup=LookupMode.NEAREST, vapor_cp=1.9)
        data = opts.to_dict()
        assert data["lookup"] == "nearest"
        assert SolverOptions.from_dict(data) == opts


class TestProjectMeta:
    def test_meta_touch(self):
        meta = ProjectMeta(name="Test")
        meta.touch()
        assert meta.modified != ""


class TestJsonPersistence:
    def test_save_and_load(self, tmp_path):
        record = AnalysisRecord(
            meta=ProjectMeta(name="Boiler"),
            kind="state",
            substance="water",
            states=[{"name": "A", "P": 100.0, "T": 99.6, "x": 0.5}],
            options=SolverOptions().to_dict(),
        )
        path = tmp_path / "state.json"
        save_analysis_json(record, path)
        loaded = load_analysis_json(path)

        assert loaded.meta.name == "Boiler"
        assert loaded.meta.created != ""
        assert loaded.substance == "water"
        assert loaded.states[0]["x"] == pytest.approx(0.5)
        assert SolverOptions.from_dict(loaded.options) == SolverOptions()

    def test_numpy_values(self, tmp_path):
        record = AnalysisRecord(results={"efficiency": np.float64(0.42)}, states=[{"P": np.array([1.0])}])
        path = tmp_path / "np.json"
        save_analysis_json(record, path)
        with open(path) as f:
            data = json.load(f)
        assert data["results"]["efficiency"] == pytest.approx(0.42)
        assert data["states"][0]["P"] == [1.0]

    def test_unicode_preserved(self, tmp_path):
        path = tmp_path / "meta.json"
        save_analysis_json(AnalysisRecord(), path)
        assert "°C" in path.read_text(encoding="utf-8")

    def test_cycle_record(self, tmp_path):
        result = compute_cycle(get_substance("water"), "carnot", {"t_min_c": 50.0, "t_max_c": 200.0})
        path = tmp_path / "carnot.json"
        save_analysis_json(result.to_record(), path)
        loaded = load_analysis_json(path)
        assert loaded.kind == "cycle"
        assert loaded.cycle_type == "carnot"
        assert loaded.results["efficiency"] == pytest.approx(result.efficiency)
        assert [p["type"] for p in loaded.processes][0] == "isothermal heat addition"
