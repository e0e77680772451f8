"""Category tags carried next to every narrative statement.

The summary switches on these tags, never on the rendered text.
"""

import enum


class SpirometryPattern(str, enum.Enum):
    OBSTRUCTION = "obstruction"
    # exactly one of FEV1/FVC below threshold
    RESTRICTION = "restriction"
    # proportional reduction of FEV1 and FVC
    NON_SPECIFIC_RESTRICTIVE = "non_specific_restrictive"
    # airflow reduction at low lung volumes (with or without mid-flow increase)
    SMALL_AIRWAY = "small_airway"
    INCREASED_MID_FLOWS = "increased_mid_flows"
    NORMAL = "normal"


class BronchodilatorResponse(str, enum.Enum):
    NOT_ADMINISTERED = "not_administered"
    # administered but pre or post FEV1 missing
    NOT_EVALUATED = "not_evaluated"
    SIGNIFICANT = "significant"
    NOT_SIGNIFICANT = "not_significant"


class SerialDirection(str, enum.Enum):
    IMPROVEMENT = "improvement"
    DETERIORATION = "deterioration"


class LungVolumePattern(str, enum.Enum):
    GAS_TRAPPING = "gas_trapping"
    RESTRICTION = "restriction"
    LARGE_NORMAL_VARIANT = "large_normal_variant"
    NORMAL = "normal"


class ResistanceLevel(str, enum.Enum):
    INCREASED = "increased"
    REDUCED = "reduced"
    NORMAL = "normal"


class DiffusionLevel(str, enum.Enum):
    IMPAIRED = "impaired"
    INCREASED = "increased"
    NORMAL = "normal"


class RestingOximetry(str, enum.Enum):
    NORMAL = "normal"
    REDUCED = "reduced"


class ExerciseDesaturation(str, enum.Enum):
    NONE = "none"
    MILD = "mild"
    MARKED = "marked"
