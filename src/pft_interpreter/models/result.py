"""Result models — the contract between the engine and its consumers.

Each classifier returns a small tagged section model: a category enum plus
the narrative it produced.  ``InterpretationResult`` flattens the narratives
into the fields a renderer needs and keeps the tagged sections alongside
under ``sections``.

All models are frozen; a result is never mutated after construction.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

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


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Per-classifier sections
# ---------------------------------------------------------------------------

class SpirometryInterpretation(_Frozen):
    """``pattern`` is None when FEV1/FVC or its LLN was not provided."""

    pattern: Optional[SpirometryPattern] = None
    severity: Optional[str] = None
    findings: tuple[str, ...] = ()

    @property
    def abnormal(self) -> bool:
        return self.pattern is not None and self.pattern is not SpirometryPattern.NORMAL


class BronchodilatorInterpretation(_Frozen):
    response: BronchodilatorResponse
    absolute_change: Optional[float] = None
    percent_change: Optional[float] = None
    statement: Optional[str] = None


class SerialChange(_Frozen):
    """A significant change of one metric against the previous test."""

    metric: str
    direction: SerialDirection
    percent_change: float

    @property
    def magnitude(self) -> float:
        return abs(self.percent_change)


class ComparisonInterpretation(_Frozen):
    changes: tuple[SerialChange, ...] = ()
    statement: str


class LungVolumeInterpretation(_Frozen):
    """``pattern`` is None when any required volume input is missing."""

    pattern: Optional[LungVolumePattern] = None
    severity: Optional[str] = None
    hyperinflation: bool = False
    hyperinflation_severity: Optional[str] = None
    findings: tuple[str, ...] = ()

    @property
    def abnormal(self) -> bool:
        return self.pattern in (LungVolumePattern.GAS_TRAPPING, LungVolumePattern.RESTRICTION)


class ResistanceInterpretation(_Frozen):
    level: ResistanceLevel
    statement: str


class DiffusionInterpretation(_Frozen):
    level: DiffusionLevel
    severity: Optional[str] = None
    # True when severity was estimated from observed/LLN rather than % predicted
    estimated: bool = False
    statement: str

    @property
    def abnormal(self) -> bool:
        return self.level is DiffusionLevel.IMPAIRED


class OximetryInterpretation(_Frozen):
    resting: RestingOximetry
    resting_threshold: float
    exercise: Optional[ExerciseDesaturation] = None
    exercise_drop: Optional[float] = None
    statement: str


class SectionResults(_Frozen):
    """Tagged outputs of every classifier; ``None`` means not evaluated."""

    spirometry: SpirometryInterpretation = SpirometryInterpretation()
    bronchodilator: BronchodilatorInterpretation
    comparison: Optional[ComparisonInterpretation] = None
    lung_volumes: LungVolumeInterpretation = LungVolumeInterpretation()
    resistance: Optional[ResistanceInterpretation] = None
    dlco: Optional[DiffusionInterpretation] = None
    oximetry: Optional[OximetryInterpretation] = None


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------

class InterpretationResult(_Frozen):
    """Structured interpretation handed to the consumer verbatim.

    Every field is optional or empty except ``summary``.
    """

    spirometry: tuple[str, ...] = ()
    bronchodilator: Optional[str] = None
    comparison: Optional[str] = None
    lung_volumes: tuple[str, ...] = ()
    resistance: Optional[str] = None
    dlco: Optional[str] = None
    oximetry: Optional[str] = None
    summary: str
    sections: SectionResults

    @classmethod
    def from_sections(cls, sections: SectionResults, summary: str) -> "InterpretationResult":
        """Flatten the tagged sections into the narrative fields."""
        return cls(
            spirometry=sections.spirometry.findings,
            bronchodilator=sections.bronchodilator.statement,
            comparison=sections.comparison.statement if sections.comparison else None,
            lung_volumes=sections.lung_volumes.findings,
            resistance=sections.resistance.statement if sections.resistance else None,
            dlco=sections.dlco.statement if sections.dlco else None,
            oximetry=sections.oximetry.statement if sections.oximetry else None,
            summary=summary,
            sections=sections,
        )
