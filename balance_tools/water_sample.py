"""
Water sample model and parameter enumeration.

WaterParameter is the closed set of ten measured properties. Each member knows
which side of the charge balance it belongs to and which WaterSample field
holds its value, so no code path needs to dispatch on free-form strings.
"""

from enum import Enum
from operator import attrgetter
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class IonSide(str, Enum):
    """Side of the charge balance a parameter contributes to."""
    CATION = "cation"
    ANION = "anion"
    AGGREGATE = "aggregate"


class WaterParameter(str, Enum):
    """Measured water-chemistry parameters, in canonical report order."""
    CALCIUM = "Calcium"
    MAGNESIUM = "Magnesium"
    SODIUM = "Sodium"
    POTASSIUM = "Potassium"
    CHLORIDE = "Chloride"
    FLUORIDE = "Fluoride"
    NITRATE = "Nitrate"
    SULFATE = "Sulfate"
    TOTAL_ALKALINITY = "TotalAlkalinity"
    CONDUCTIVITY = "Conductivity"

    @property
    def side(self) -> IonSide:
        return _SIDES[self]

    @property
    def field_name(self) -> str:
        """Name of the WaterSample field holding this parameter."""
        return _FIELD_NAMES[self]

    @property
    def is_cation(self) -> bool:
        return self.side is IonSide.CATION

    @property
    def is_anion(self) -> bool:
        return self.side is IonSide.ANION


CATIONS: Tuple[WaterParameter, ...] = (
    WaterParameter.CALCIUM,
    WaterParameter.MAGNESIUM,
    WaterParameter.SODIUM,
    WaterParameter.POTASSIUM,
)

# Total alkalinity counts as an anion-side field
ANIONS: Tuple[WaterParameter, ...] = (
    WaterParameter.CHLORIDE,
    WaterParameter.FLUORIDE,
    WaterParameter.NITRATE,
    WaterParameter.SULFATE,
    WaterParameter.TOTAL_ALKALINITY,
)

ION_PARAMETERS: Tuple[WaterParameter, ...] = CATIONS + ANIONS
ALL_PARAMETERS: Tuple[WaterParameter, ...] = ION_PARAMETERS + (WaterParameter.CONDUCTIVITY,)

_SIDES: Dict[WaterParameter, IonSide] = {
    **{p: IonSide.CATION for p in CATIONS},
    **{p: IonSide.ANION for p in ANIONS},
    WaterParameter.CONDUCTIVITY: IonSide.AGGREGATE,
}

_FIELD_NAMES: Dict[WaterParameter, str] = {
    WaterParameter.CALCIUM: "ca_mg_l",
    WaterParameter.MAGNESIUM: "mg_mg_l",
    WaterParameter.SODIUM: "na_mg_l",
    WaterParameter.POTASSIUM: "k_mg_l",
    WaterParameter.CHLORIDE: "cl_mg_l",
    WaterParameter.FLUORIDE: "f_mg_l",
    WaterParameter.NITRATE: "no3_mg_l",
    WaterParameter.SULFATE: "so4_mg_l",
    WaterParameter.TOTAL_ALKALINITY: "alkalinity_mg_l_caco3",
    WaterParameter.CONDUCTIVITY: "conductivity_us_cm",
}

_ACCESSORS: Dict[WaterParameter, Callable[["WaterSample"], Optional[float]]] = {
    parameter: attrgetter(field_name) for parameter, field_name in _FIELD_NAMES.items()
}


class WaterSample(BaseModel):
    """
    Water sample as reported by the lab (input).

    Every field is optional: None means the value is unknown and should be
    solved for. NaN and infinity are rejected. Negative values are accepted
    here and rejected by the validator so that every offending field can be
    reported at once.

    Fields can be populated by name (ca_mg_l=20) or by the canonical
    parameter name (Calcium=20).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    # Cations (mg/L)
    ca_mg_l: Optional[float] = Field(None, alias="Calcium", description="Calcium (mg/L)")
    mg_mg_l: Optional[float] = Field(None, alias="Magnesium", description="Magnesium (mg/L)")
    na_mg_l: Optional[float] = Field(None, alias="Sodium", description="Sodium (mg/L)")
    k_mg_l: Optional[float] = Field(None, alias="Potassium", description="Potassium (mg/L)")

    # Anions (mg/L)
    cl_mg_l: Optional[float] = Field(None, alias="Chloride", description="Chloride (mg/L)")
    f_mg_l: Optional[float] = Field(None, alias="Fluoride", description="Fluoride (mg/L)")
    no3_mg_l: Optional[float] = Field(None, alias="Nitrate", description="Nitrate (mg/L)")
    so4_mg_l: Optional[float] = Field(None, alias="Sulfate", description="Sulfate (mg/L)")
    alkalinity_mg_l_caco3: Optional[float] = Field(
        None, alias="TotalAlkalinity", description="Total alkalinity (mg/L as CaCO3)"
    )

    # Aggregate
    conductivity_us_cm: Optional[float] = Field(
        None, alias="Conductivity", description="Electrical conductivity (uS/cm)"
    )

    def get(self, parameter: WaterParameter) -> Optional[float]:
        """Value of a single parameter, None if unknown."""
        return _ACCESSORS[parameter](self)

    def has(self, parameter: WaterParameter) -> bool:
        return self.get(parameter) is not None

    def with_value(self, parameter: WaterParameter, value: Optional[float]) -> "WaterSample":
        """Copy of this sample with one parameter replaced."""
        return self.model_copy(update={parameter.field_name: value})

    def values(self) -> Dict[WaterParameter, Optional[float]]:
        return {parameter: self.get(parameter) for parameter in ALL_PARAMETERS}

    def missing_parameters(
        self, parameters: Iterable[WaterParameter] = ALL_PARAMETERS
    ) -> List[WaterParameter]:
        return [p for p in parameters if self.get(p) is None]

    def negative_parameters(self) -> List[WaterParameter]:
        return [p for p, value in self.values().items() if value is not None and value < 0]
