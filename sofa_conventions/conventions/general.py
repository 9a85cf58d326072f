"""General-purpose conventions with no constraint on the measurement setup."""

from sofa_conventions.conventions.base import (
    FIR_VARIABLES,
    SOFA_BASE,
    TF_VARIABLES,
    required_attribute,
)
from sofa_conventions.conventions.registry import register_convention

GENERAL_FIR = SOFA_BASE.extend(
    "GeneralFIR",
    version="1.0",
    description="Impulse responses for any emitter/receiver setup",
    attributes=(
        required_attribute("SOFAConventions", equals="GeneralFIR"),
        required_attribute("DataType", equals="FIR"),
    ),
    variables=FIR_VARIABLES,
)

GENERAL_TF = SOFA_BASE.extend(
    "GeneralTF",
    version="1.0",
    description="Transfer functions for any emitter/receiver setup",
    attributes=(
        required_attribute("SOFAConventions", equals="GeneralTF"),
        required_attribute("DataType", equals="TF"),
    ),
    variables=TF_VARIABLES,
    matching_shapes=(("Data.Real", "Data.Imag"),),
)

register_convention(GENERAL_FIR)
register_convention(GENERAL_TF)
