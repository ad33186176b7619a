"""Tests for utility modules."""

import numpy as np
import pytest

from thermosim.core.errors import UnsupportedUnitError, ValidationError
from thermosim.core.substances import SaturationPoint
from thermosim.utils.constants import P_ATM_KPA, T_CELSIUS_OFFSET, c_to_k, k_to_c
from thermosim.utils.interpolation import interp_clamped, nearest_index
from thermosim.utils.units import (
    convert,
    get_unit_registry,
    pressure_to_kpa,
    temperature_to_celsius,
)
from thermosim.utils.validation import (
    Severity,
    ValidationResult,
    validate_cycle_params,
    validate_positive,
    validate_range,
    validate_saturation_table,
)


class TestConstants:
    def test_p_atm(self):
        assert P_ATM_KPA == pytest.approx(101.325)

    def test_celsius_offset(self):
        assert T_CELSIUS_OFFSET == pytest.approx(273.15)

    def test_kelvin_helpers(self):
        assert c_to_k(25.0) == pytest.approx(298.15)
        assert k_to_c(373.15) == pytest.approx(100.0)


class TestUnits:
    def test_kpa_identity(self):
        assert pressure_to_kpa(250.0, "kPa") == pytest.approx(250.0)

    def test_bar_to_kpa(self):
        assert pressure_to_kpa(1.0, "bar") == pytest.approx(100.0, rel=1e-9)

    def test_atm_to_kpa(self):
        assert pressure_to_kpa(2.0, "atm") == pytest.approx(202.65, rel=1e-9)

    def test_unit_case_insensitive(self):
        assert pressure_to_kpa(1.0, "BAR") == pytest.approx(100.0, rel=1e-9)

    def test_psi_to_kpa(self):
        assert pressure_to_kpa(14.696, "psi") == pytest.approx(101.325, rel=1e-3)

    def test_empty_unit_is_base(self):
        assert pressure_to_kpa(42.0, "") == 42.0
        assert temperature_to_celsius(42.0, None) == 42.0

    def test_kelvin_to_celsius(self):
        assert temperature_to_celsius(300.0, "K") == pytest.approx(26.85, rel=1e-9)

    def test_celsius_identity(self):
        assert temperature_to_celsius(80.0, "°C") == pytest.approx(80.0)

    def test_fahrenheit_to_celsius(self):
        assert temperature_to_celsius(212.0, "°F") == pytest.approx(100.0, rel=1e-9)

    def test_unknown_unit_strict(self):
        with pytest.raises(UnsupportedUnitError):
            pressure_to_kpa(1.0, "mmHg")

    def test_unknown_unit_is_validation_error(self):
        with pytest.raises(ValidationError):
            temperature_to_celsius(1.0, "rankine")

    def test_unknown_unit_lenient_passthrough(self):
        assert pressure_to_kpa(7.0, "furlongs", strict=False) == 7.0
        assert temperature_to_celsius(7.0, "R", strict=False) == 7.0

    def test_convert_generic(self):
        assert convert(1.0, "MPa", "kPa") == pytest.approx(1000.0, rel=1e-9)

    def test_shared_registry(self):
        ureg = get_unit_registry()
        assert ureg is get_unit_registry()
        assert ureg.Quantity(1.0, "bar").to("kPa").magnitude == pytest.approx(100.0)


class TestInterpolation:
    def test_linear_exact(self):
        x = np.array([0, 1, 2, 3], dtype=float)
        y = np.array([0, 2, 4, 6], dtype=float)
        assert interp_clamped(x, y, 1.5) == pytest.approx(3.0)

    def test_linear_clamps_below(self):
        x = np.array([0, 1, 2], dtype=float)
        y = np.array([10, 20, 30], dtype=float)
        assert interp_clamped(x, y, -5.0) == pytest.approx(10.0)

    def test_linear_clamps_above(self):
        x = np.array([0, 1, 2], dtype=float)
        y = np.array([10, 20, 30], dtype=float)
        assert interp_clamped(x, y, 9.0) == pytest.approx(30.0)

    def test_nearest_index(self):
        assert nearest_index(np.array([1.0, 5.0, 9.0]), 6.0) == 1

    def test_nearest_index_tie_resolves_to_first(self):
        assert nearest_index(np.array([0.0, 2.0, 4.0]), 1.0) == 0


def _row(P, T, f=1.0, g=2.0):
    return SaturationPoint(P=P, T=T, vf=f, vg=g, hf=f, hg=g, sf=f, sg=g, uf=f, ug=g)


class TestValidation:
    def test_validate_positive(self):
        result = ValidationResult()
        validate_positive("p_low", -1, result)
        assert not result.is_valid

    def test_validate_range(self):
        result = ValidationResult()
        validate_range("x", 5, 0, 3, result)
        assert not result.is_valid

    def test_validate_range_warning_only(self):
        result = ValidationResult()
        validate_range("x", 5, 0, 3, result, Severity.WARNING)
        assert result.is_valid
        assert result.has_warnings

    def test_rankine_params_valid(self):
        assert validate_cycle_params("rankine", {"p_low": 10, "p_high": 3000}).is_valid

    def test_rankine_inverted_pressures(self):
        result = validate_cycle_params("rankine", {"p_low": 3000, "p_high": 10})
        assert not result.is_valid
        assert "p_high" in result.summary()

    def test_missing_parameter(self):
        result = validate_cycle_params("carnot", {"t_min_c": 50})
        assert not result.is_valid
        assert result.errors[0].parameter == "t_max_c"

    def test_numpy_numbers_accepted(self):
        params = {"p_low": np.int64(10), "p_high": np.float32(3000)}
        assert validate_cycle_params("rankine", params).is_valid

    def test_boolean_rejected(self):
        assert not validate_cycle_params("rankine", {"p_low": True, "p_high": 3000}).is_valid

    def test_non_numeric_parameter(self):
        result = validate_cycle_params("rankine", {"p_low": "ten", "p_high": 3000})
        assert not result.is_valid

    def test_brayton_ratio_below_one(self):
        result = validate_cycle_params(
            "brayton", {"pressure_ratio": 0.5, "t_min_c": 25, "t_max_c": 1200}
        )
        assert not result.is_valid

    def test_brayton_high_ratio_warning(self):
        result = validate_cycle_params(
            "brayton", {"pressure_ratio": 100, "t_min_c": 25, "t_max_c": 1200}
        )
        assert result.is_valid
        assert result.has_warnings

    def test_saturation_table_valid(self):
        rows = [_row(10, 20), _row(50, 80), _row(100, 120, f=3.0, g=3.0)]
        assert validate_saturation_table("demo", rows).is_valid

    def test_saturation_table_unordered(self):
        rows = [_row(50, 80), _row(10, 20), _row(100, 120, f=3.0, g=3.0)]
        assert not validate_saturation_table("demo", rows).is_valid

    def test_saturation_table_bad_critical_row(self):
        rows = [_row(10, 20), _row(50, 80)]
        result = validate_saturation_table("demo", rows)
        assert not result.is_valid
        assert "critical" in result.summary()
