"""Public model re-exports for pft_interpreter.

Consumers should import from ``pft_interpreter.models`` rather than
reaching into sub-modules directly.
"""

# --- Category tags ---
from pft_interpreter.models.enums import (
    BronchodilatorResponse,
    DiffusionLevel,
    ExerciseDesaturation,
    LungVolumePattern,
    ResistanceLevel,
    RestingOximetry,
    SerialDirection,
    SpirometryPattern,
)

# --- Input ---
from pft_interpreter.models.record import MeasurementRecord

# --- Output ---
from pft_interpreter.models.result import (
    BronchodilatorInterpretation,
    ComparisonInterpretation,
    DiffusionInterpretation,
    InterpretationResult,
    LungVolumeInterpretation,
    OximetryInterpretation,
    ResistanceInterpretation,
    SectionResults,
    SerialChange,
    SpirometryInterpretation,
)

__all__ = [
    # Tags
    "BronchodilatorResponse",
    "DiffusionLevel",
    "ExerciseDesaturation",
    "LungVolumePattern",
    "ResistanceLevel",
    "RestingOximetry",
    "SerialDirection",
    "SpirometryPattern",
    # Input
    "MeasurementRecord",
    # Output
    "BronchodilatorInterpretation",
    "ComparisonInterpretation",
    "DiffusionInterpretation",
    "InterpretationResult",
    "LungVolumeInterpretation",
    "OximetryInterpretation",
    "ResistanceInterpretation",
    "SectionResults",
    "SerialChange",
    "SpirometryInterpretation",
]
