"""
Shared pytest fixtures for water-balance-mcp test suite.

Provides:
- Lab report fixtures (one equivalent of every ion)
- Test markers registration
- Parametrized report data for single-unknown scenarios
"""
import pytest
from typing import Dict, Any

from balance_tools.water_sample import WaterSample


# =============================================================================
# Pytest Markers Registration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks unit tests (fast, no external deps)")
    config.addinivalue_line("markers", "integration: marks tests going through the tool layer")


# =============================================================================
# Lab Report Fixtures
# =============================================================================

# Each ion is exactly 1 meq/L with the configured equivalent weights:
# cations = 4 meq/L, anions = 5 meq/L.
UNIT_MEQ_REPORT: Dict[str, float] = {
    "Calcium": 20.0,
    "Magnesium": 12.0,
    "Sodium": 23.0,
    "Potassium": 39.0,
    "Chloride": 35.5,
    "Fluoride": 19.0,
    "Nitrate": 14.0,
    "Sulfate": 48.0,
    "TotalAlkalinity": 50.0,
    "Conductivity": 250.0,
}


@pytest.fixture
def unit_meq_report() -> Dict[str, Any]:
    """Complete lab report, every ion at 1 meq/L and Conductivity 250 uS/cm."""
    return dict(UNIT_MEQ_REPORT)


@pytest.fixture
def complete_sample(unit_meq_report) -> WaterSample:
    """All ten parameters present (nothing to solve)."""
    return WaterSample(**unit_meq_report)


@pytest.fixture
def report_without():
    """Factory: the unit report with the named parameters removed."""
    def _build(*names: str, **overrides: Any) -> WaterSample:
        report = dict(UNIT_MEQ_REPORT)
        for name in names:
            report.pop(name)
        report.update(overrides)
        return WaterSample(**report)
    return _build


@pytest.fixture
def cations_only_sample() -> WaterSample:
    """Conductivity with three cations, Sodium unknown, no anions (4 meq/L total)."""
    return WaterSample(Calcium=20.0, Magnesium=12.0, Potassium=39.0, Conductivity=400.0)


@pytest.fixture
def anions_only_sample() -> WaterSample:
    """Conductivity with four anions, TotalAlkalinity unknown, no cations (5 meq/L total)."""
    return WaterSample(
        Chloride=35.5, Fluoride=19.0, Nitrate=14.0, Sulfate=48.0, Conductivity=500.0
    )


@pytest.fixture
def cations_and_anions_sample() -> WaterSample:
    """Conductivity 500 uS/cm with Calcium and Chloride unknown."""
    return WaterSample(
        Magnesium=12.0, Sodium=23.0, Potassium=39.0,
        Fluoride=19.0, Nitrate=14.0, Sulfate=48.0, TotalAlkalinity=50.0,
        Conductivity=500.0,
    )


# =============================================================================
# Parametrized Test Data
# =============================================================================

# Expected solved values for the unit report with one ion removed
# (cation side solved against 5 meq/L of anions, anion side against 4 meq/L of cations)
SINGLE_UNKNOWN_EXPECTATIONS = [
    pytest.param("Calcium", 40.0, id="calcium"),
    pytest.param("Magnesium", 24.0, id="magnesium"),
    pytest.param("Sodium", 46.0, id="sodium"),
    pytest.param("Potassium", 78.0, id="potassium"),
    pytest.param("Chloride", 0.0, id="chloride"),
    pytest.param("Fluoride", 0.0, id="fluoride"),
    pytest.param("Nitrate", 0.0, id="nitrate"),
    pytest.param("Sulfate", 0.0, id="sulfate"),
    pytest.param("TotalAlkalinity", 0.0, id="total_alkalinity"),
]
