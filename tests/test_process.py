"""Tests for quasi-static process calculations."""

import dataclasses
import math

import pytest

from thermosim.core.config import SolverOptions
from thermosim.core.errors import (
    MissingPressureConditionError,
    UnsupportedProcessError,
    UnsupportedPropertyPairError,
    ValidationError,
)
from thermosim.core.process import (
    EndCondition,
    ProcessType,
    compute_process,
    heating_temperature_rise,
    internal_energy_change,
)
from thermosim.core.saturation import LookupMode
from thermosim.core.state import resolve
from thermosim.core.substances import get_substance

NEAREST = SolverOptions(lookup=LookupMode.NEAREST)


@pytest.fixture
def air():
    return get_substance("air")


@pytest.fixture
def water():
    return get_substance("water")


@pytest.fixture
def air_start(air):
    return resolve(air, "P", 100.0, "T", 25.0)


class TestIdealGasProcesses:
    def test_isobaric(self, air, air_start):
        proc = compute_process(air, air_start, "isobaric", ("T", 300.0))
        assert proc.end.P == pytest.approx(100.0)
        assert proc.W == pytest.approx(0.287 * 275.0)
        assert proc.Q == pytest.approx(1.005 * 275.0)

    def test_isobaric_rejects_pressure_end(self, air, air_start):
        with pytest.raises(ValidationError):
            compute_process(air, air_start, ProcessType.ISOBARIC, ("P", 200.0))

    def test_isochoric_to_temperature(self, air, air_start):
        proc = compute_process(air, air_start, "isochoric", ("T", 300.0))
        assert proc.W == 0.0
        assert proc.end.v == pytest.approx(air_start.v)
        assert proc.end.P == pytest.approx(100.0 * 573.15 / 298.15)
        assert proc.Q == pytest.approx(0.718 * 275.0)

    def test_isochoric_to_pressure(self, air, air_start):
        proc = compute_process(air, air_start, "isochoric", ("P", 200.0))
        assert proc.W == 0.0
        assert proc.end.T_K == pytest.approx(2.0 * 298.15)
        assert proc.end.v == pytest.approx(air_start.v)

    def test_isochoric_other_end_property(self, air, air_start):
        with pytest.raises(UnsupportedPropertyPairError):
            compute_process(air, air_start, "isochoric", ("s", 1.0))

    def test_isothermal(self, air, air_start):
        proc = compute_process(air, air_start, "isothermal", ("P", 200.0))
        assert proc.end.T == pytest.approx(25.0)
        assert proc.W == pytest.approx(0.287 * 298.15 * math.log(0.5))
        assert proc.Q == pytest.approx(proc.W)
        assert proc.delta_u == pytest.approx(0.0, abs=1e-9)

    def test_isothermal_unsupported_end(self, air, air_start):
        with pytest.raises(UnsupportedPropertyPairError):
            compute_process(air, air_start, "isothermal", ("x", 0.5))

    def test_isentropic_compression(self, air, air_start):
        proc = compute_process(air, air_start, "isentropic", ("P", 800.0))
        T2_K = 298.15 * 8.0 ** (0.4 / 1.4)
        assert proc.end.T_K == pytest.approx(T2_K)
        assert proc.end.P == pytest.approx(800.0)
        assert proc.Q == 0.0
        assert proc.W == pytest.approx(-0.718 * (T2_K - 298.15))
        assert proc.W < 0

    def test_isentropic_needs_pressure(self, air, air_start):
        with pytest.raises(MissingPressureConditionError):
            compute_process(air, air_start, "isentropic", ("T", 300.0))


class TestRealSubstanceProcesses:
    def test_isobaric_evaporation(self, water):
        start = resolve(water, "P", 100.0, "x", 0.0, NEAREST)
        proc = compute_process(water, start, "isobaric", ("x", 1.0), NEAREST)
        assert proc.W == pytest.approx(100.0 * (1.672 - 0.001043))
        assert proc.Q == pytest.approx(2675.6 - 419.1)

    def test_isochoric_not_supported(self, water):
        start = resolve(water, "P", 100.0, "x", 0.0, NEAREST)
        with pytest.raises(UnsupportedPropertyPairError):
            compute_process(water, start, "isochoric", ("P", 200.0), NEAREST)

    def test_isothermal_legacy_heat(self, water):
        start = resolve(water, "T", 100.0, "x", 0.0, NEAREST)
        proc = compute_process(water, start, "isothermal", ("x", 1.0), NEAREST)
        assert proc.Q == 0.0
        assert proc.W == pytest.approx(-(proc.end.u - start.u))

    def test_isothermal_legacy_heat_warns(self, water, caplog):
        start = resolve(water, "T", 100.0, "x", 0.0, NEAREST)
        with caplog.at_level("WARNING"):
            compute_process(water, start, "isothermal", ("x", 1.0), NEAREST)
        assert "corrected_isothermal_heat" in caplog.text

    def test_isothermal_corrected_heat(self, water):
        options = NEAREST.with_changes(corrected_isothermal_heat=True)
        start = resolve(water, "T", 100.0, "x", 0.0, options)
        proc = compute_process(water, start, "isothermal", ("x", 1.0), options)
        assert proc.Q == pytest.approx(373.15 * (7.354 - 1.3072))
        assert proc.W == pytest.approx(proc.Q - proc.delta_u)

    def test_isentropic_expansion(self, water):
        start = resolve(water, "P", 1555.0, "x", 1.0, NEAREST)
        proc = compute_process(water, start, "isentropic", ("P", 12.35), NEAREST)
        assert proc.end.x == pytest.approx((6.430 - 0.7038) / (8.074 - 0.7038))
        assert proc.end.s == pytest.approx(start.s)
        assert proc.Q == 0.0
        assert proc.W > 0


class TestProcessInputs:
    def test_unknown_process_type(self, air, air_start):
        with pytest.raises(UnsupportedProcessError):
            compute_process(air, air_start, "adiabatic", ("P", 200.0))

    def test_type_name_case_insensitive(self, air, air_start):
        proc = compute_process(air, air_start, "Isobaric", ("T", 300.0))
        assert proc.type == "isobaric"

    def test_end_condition_forms(self, air, air_start):
        a = compute_process(air, air_start, "isobaric", EndCondition("T", 300.0))
        b = compute_process(air, air_start, "isobaric", {"prop": "T", "value": 300.0})
        assert a == b

    def test_process_is_frozen(self, air, air_start):
        proc = compute_process(air, air_start, "isobaric", ("T", 300.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            proc.W = 0.0

    def test_to_record(self, air, air_start):
        proc = compute_process(air, air_start, "isochoric", ("T", 300.0))
        record = proc.to_record(air)
        assert record.kind == "process"
        assert len(record.states) == 2
        assert record.results["W"] == 0.0
        assert record.processes[0]["end"]["T"] == pytest.approx(300.0)


class TestEnergyBalances:
    def test_internal_energy_change(self):
        assert internal_energy_change(50.0, 20.0) == pytest.approx(30.0)
        assert internal_energy_change(-10.0, 20.0) == pytest.approx(-30.0)

    def test_first_law_holds_for_processes(self, air, air_start):
        proc = compute_process(air, air_start, "isobaric", ("T", 300.0))
        assert internal_energy_change(proc.Q, proc.W) == pytest.approx(proc.delta_u)

    @pytest.mark.parametrize("material, c", [("water", 4.184), ("copper", 0.385), ("Air", 1.005)])
    def test_temperature_rise(self, material, c):
        assert heating_temperature_rise(100.0, 2.0, material) == pytest.approx(100.0 / (2.0 * c))

    def test_temperature_rise_custom_specific_heat(self):
        assert heating_temperature_rise(10.0, 1.0, 0.5) == pytest.approx(20.0)

    def test_unknown_material(self):
        with pytest.raises(ValidationError):
            heating_temperature_rise(100.0, 1.0, "granite")

    def test_non_positive_mass(self):
        with pytest.raises(ValidationError):
            heating_temperature_rise(100.0, 0.0)
