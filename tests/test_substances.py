"""Tests for the substance catalog."""

import dataclasses

import pytest

from thermosim.core.substances import (
    SubstanceKind,
    get_substance,
    list_substances,
    load_catalog,
)
from thermosim.utils import R_UNIVERSAL


class TestCatalog:
    def test_lists_bundled_substances(self):
        names = list_substances()
        for key in ("water", "r134a", "ammonia", "co2", "air"):
            assert key in names

    def test_lookup_by_key_case_insensitive(self):
        assert get_substance("WATER").key == "water"

    def test_lookup_by_display_name(self):
        assert get_substance("Ammonia (R-717)").key == "ammonia"

    def test_unknown_substance_raises(self):
        with pytest.raises(KeyError):
            get_substance("unobtainium")

    def test_catalog_is_loaded_once(self):
        assert load_catalog() is load_catalog()

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            load_catalog()["steam"] = get_substance("water")

    def test_substance_is_frozen(self):
        water = get_substance("water")
        with pytest.raises(dataclasses.FrozenInstanceError):
            water.name = "Steam"


class TestSubstanceData:
    def test_air_is_ideal_gas(self):
        air = get_substance("air")
        assert air.kind is SubstanceKind.IDEAL_GAS
        assert air.is_ideal_gas
        assert air.R == pytest.approx(0.287)
        assert air.gamma == pytest.approx(1.4)
        assert air.saturation == ()

    def test_water_table(self):
        water = get_substance("water")
        assert water.is_real
        assert len(water.saturation) == 8
        assert water.saturation[2].P == pytest.approx(101.4)
        assert water.saturation[2].T == pytest.approx(100.0)

    @pytest.mark.parametrize("key", ["water", "r134a", "ammonia", "co2"])
    def test_critical_row_coincides(self, key):
        crit = get_substance(key).critical_point
        assert crit.vf == crit.vg
        assert crit.hf == crit.hg
        assert crit.sf == crit.sg

    @pytest.mark.parametrize("key", ["water", "r134a", "ammonia", "co2"])
    def test_rows_ascend(self, key):
        sub = get_substance(key)
        P = sub.column("P")
        T = sub.column("T")
        assert all(P[1:] > P[:-1])
        assert all(T[1:] > T[:-1])

    def test_air_gas_constant_from_molar_mass(self):
        air = get_substance("air")
        assert air.R == pytest.approx(R_UNIVERSAL / air.molar_mass, rel=1e-3)
