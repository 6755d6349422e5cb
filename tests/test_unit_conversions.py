"""
Tests for unit conversions and the equivalent weight table.
"""
import dataclasses

import pytest

from balance_tools.core_config import CONFIG, CoreConfig
from balance_tools.exceptions import UnknownParameterError
from balance_tools.unit_conversions import (
    conductivity_to_meq,
    meq_to_conductivity,
    meq_to_mg,
    mg_to_meq,
)
from balance_tools.water_sample import ION_PARAMETERS, WaterParameter


pytestmark = pytest.mark.unit


EXPECTED_WEIGHTS = {
    WaterParameter.CALCIUM: 20.0,
    WaterParameter.MAGNESIUM: 12.0,
    WaterParameter.SODIUM: 23.0,
    WaterParameter.POTASSIUM: 39.0,
    WaterParameter.CHLORIDE: 35.5,
    WaterParameter.FLUORIDE: 19.0,
    WaterParameter.NITRATE: 14.0,
    WaterParameter.SULFATE: 48.0,
    WaterParameter.TOTAL_ALKALINITY: 50.0,
}


class TestEquivalentWeights:
    """Fixed equivalent weight table."""

    def test_table(self):
        assert CONFIG.get_equiv_weights() == EXPECTED_WEIGHTS
        assert list(CONFIG.get_equiv_weights()) == list(ION_PARAMETERS)

    @pytest.mark.parametrize("parameter", list(EXPECTED_WEIGHTS))
    def test_lookup(self, parameter):
        assert CONFIG.get_equiv_weight(parameter) == EXPECTED_WEIGHTS[parameter]

    def test_conductivity_has_no_weight(self):
        with pytest.raises(UnknownParameterError) as exc_info:
            CONFIG.get_equiv_weight(WaterParameter.CONDUCTIVITY)
        assert "Unknown property: Conductivity" in str(exc_info.value)

    def test_string_is_not_a_parameter(self):
        with pytest.raises(UnknownParameterError):
            CONFIG.get_equiv_weight("Iron")

    def test_conductivity_factor(self):
        assert CONFIG.CONDUCTIVITY_CONVERSION_FACTOR == 100.0

    def test_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            CONFIG.CALCIUM_EQUIV_WEIGHT = 40.0

    def test_fresh_instance_matches_global(self):
        assert CoreConfig() == CONFIG


class TestConversions:
    """mg/L, meq/L and conductivity conversions."""

    def test_mg_to_meq(self):
        assert mg_to_meq(40.0, WaterParameter.CALCIUM) == pytest.approx(2.0)
        assert mg_to_meq(96.0, WaterParameter.SULFATE) == pytest.approx(2.0)

    def test_meq_to_mg(self):
        assert meq_to_mg(2.0, WaterParameter.CHLORIDE) == pytest.approx(71.0)

    def test_negative_meq_stays_negative(self):
        assert meq_to_mg(-1.0, WaterParameter.SODIUM) == pytest.approx(-23.0)

    def test_conductivity(self):
        assert conductivity_to_meq(250.0) == pytest.approx(2.5)
        assert meq_to_conductivity(4.5) == pytest.approx(450.0)

    def test_conversion_rejects_conductivity_parameter(self):
        with pytest.raises(UnknownParameterError):
            mg_to_meq(100.0, WaterParameter.CONDUCTIVITY)
