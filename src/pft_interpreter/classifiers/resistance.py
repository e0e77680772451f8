"""Airway resistance (Raw) classifier.

Limits of normal and % predicted cut-offs are independent checks: either
one alone is enough to call resistance increased (or reduced).
"""

from __future__ import annotations

from pft_interpreter import constants as c
from pft_interpreter.models.enums import ResistanceLevel
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import ResistanceInterpretation

_STATEMENTS = {
    ResistanceLevel.INCREASED: "Increased airway resistance.",
    ResistanceLevel.REDUCED: "Reduced airway resistance.",
    ResistanceLevel.NORMAL: "Normal airway resistance.",
}


def classify_resistance(record: MeasurementRecord) -> ResistanceInterpretation | None:
    raw = record.raw_obs
    if raw is None:
        return None

    pct = record.raw_pct
    increased = (record.raw_uln is not None and raw > record.raw_uln) or (
        pct is not None and pct > c.RAW_PCT_INCREASED
    )
    reduced = (record.raw_lln is not None and raw < record.raw_lln) or (
        pct is not None and pct < c.RAW_PCT_REDUCED
    )

    if increased:
        level = ResistanceLevel.INCREASED
    elif reduced:
        level = ResistanceLevel.REDUCED
    else:
        level = ResistanceLevel.NORMAL
    return ResistanceInterpretation(level=level, statement=_STATEMENTS[level])
