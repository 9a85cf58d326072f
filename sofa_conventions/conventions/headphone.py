"""Headphone impulse responses: two emitters (the drivers), two receivers (the ears)."""

from sofa_conventions.conventions.base import FIR_VARIABLES, SOFA_BASE, required_attribute
from sofa_conventions.conventions.registry import register_convention

SIMPLE_HEADPHONE_IR = SOFA_BASE.extend(
    "SimpleHeadphoneIR",
    version="1.0",
    description="Headphone impulse responses",
    attributes=(
        required_attribute("SOFAConventions", equals="SimpleHeadphoneIR"),
        required_attribute("DataType", equals="FIR"),
        required_attribute("DatabaseName"),
        required_attribute("ListenerShortName"),
        required_attribute("SourceModel"),
        required_attribute("SourceManufacturer"),
    ),
    variables=FIR_VARIABLES,
    fixed_dimensions={"R": 2, "E": 2},
)

register_convention(SIMPLE_HEADPHONE_IR)
