"""Free-field conventions: HRTF sets and source directivities.

SimpleFreeFieldHRIR / SimpleFreeFieldTF describe a listener with two ears
(``R=2``) and a single emitter (``E=1``) per source position, the source
moving on a sphere (spherical ``SourcePosition``) around a listener whose
orientation is given by cartesian View/Up vectors.

FreeFieldDirectivityTF describes how a source (instrument, loudspeaker)
radiates: complex transfer functions ``Data.Real``/``Data.Imag`` of shape
``[M, R, N]`` at the frequencies listed in ``N``.
"""

from sofa_conventions.conventions.base import (
    CARTESIAN_ONLY,
    FIR_VARIABLES,
    SOFA_BASE,
    SPHERICAL_ONLY,
    TF_VARIABLES,
    position_spec,
    required_attribute,
)
from sofa_conventions.conventions.registry import register_convention

_LISTENER_ORIENTATION = (
    position_spec("Listener", "View", coordinates=CARTESIAN_ONLY),
    position_spec("Listener", "Up"),
    position_spec("Source", "Position", coordinates=SPHERICAL_ONLY),
)

SIMPLE_FREE_FIELD_HRIR = SOFA_BASE.extend(
    "SimpleFreeFieldHRIR",
    version="1.0",
    description="Head-related impulse responses measured in free field",
    attributes=(
        required_attribute("SOFAConventions", equals="SimpleFreeFieldHRIR"),
        required_attribute("DataType", equals="FIR"),
        required_attribute("RoomType", equals="free field"),
        required_attribute("DatabaseName"),
    ),
    variables=_LISTENER_ORIENTATION + FIR_VARIABLES,
    fixed_dimensions={"R": 2, "E": 1},
)

SIMPLE_FREE_FIELD_TF = SOFA_BASE.extend(
    "SimpleFreeFieldTF",
    version="1.0",
    description="Head-related transfer functions measured in free field",
    attributes=(
        required_attribute("SOFAConventions", equals="SimpleFreeFieldTF"),
        required_attribute("DataType", equals="TF"),
        required_attribute("RoomType", equals="free field"),
        required_attribute("DatabaseName"),
    ),
    variables=_LISTENER_ORIENTATION + TF_VARIABLES,
    fixed_dimensions={"R": 2, "E": 1},
    matching_shapes=(("Data.Real", "Data.Imag"),),
)

FREE_FIELD_DIRECTIVITY_TF = SOFA_BASE.extend(
    "FreeFieldDirectivityTF",
    version="1.0",
    description="Directivity of a sound source as transfer functions",
    attributes=(
        required_attribute("SOFAConventions", equals="FreeFieldDirectivityTF"),
        required_attribute("DataType", equals="TF"),
        required_attribute("RoomType", equals="free field"),
        required_attribute("DatabaseName"),
    ),
    variables=TF_VARIABLES,
    matching_shapes=(("Data.Real", "Data.Imag"),),
)

register_convention(SIMPLE_FREE_FIELD_HRIR)
register_convention(SIMPLE_FREE_FIELD_TF)
register_convention(FREE_FIELD_DIRECTIVITY_TF)
