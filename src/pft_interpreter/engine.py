"""InterpretationEngine — runs every classifier and the summary for one record.

Stateless engine pattern: the only thing held between calls is the
read-only :class:`GradingStore`.  ``interpret`` performs no I/O, never
mutates its input, and returns a fresh frozen result, so one engine can
serve concurrent callers and the same record always yields the same result.

Sections:
    spirometry      — obstruction / restrictive pattern / small airways
    bronchodilator  — FEV1 response (>= 200 mL and >= 12%)
    comparison      — FEV1, FVC, DLCO change against a previous test
    lung_volumes    — gas trapping, hyperinflation, restriction
    resistance      — Raw increased / reduced / normal
    dlco            — diffusing capacity, Hb-correction aware
    oximetry        — age-banded resting SpO2 and exercise desaturation
    summary         — one sentence reconciling all of the above
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pft_interpreter.classifiers import (
    classify_diffusion,
    classify_lung_volumes,
    classify_resistance,
    classify_spirometry,
    compare_with_previous,
    evaluate_bronchodilator,
    evaluate_oximetry,
)
from pft_interpreter.grading import GradingStore
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import InterpretationResult, SectionResults
from pft_interpreter.summary import synthesize_summary

logger = logging.getLogger(__name__)

# Tables the classifiers look up by name; checked once at construction.
REQUIRED_TABLES = (
    "obstruction_fev1",
    "obstruction_ratio",
    "gas_trapping",
    "hyperinflation",
    "restriction",
    "diffusion_impairment",
    "diffusion_impairment_estimated",
)


class InterpretationEngine:
    """Maps a :class:`MeasurementRecord` to an :class:`InterpretationResult`.

    Args:
        store: a loaded :class:`GradingStore`; the packaged tables are
               loaded when omitted.

    Raises ``KeyError`` at construction if a required grading table is
    missing from the store.
    """

    def __init__(self, store: GradingStore | None = None) -> None:
        if store is None:
            store = GradingStore().load()
        for name in REQUIRED_TABLES:
            store.get(name)
        self._store = store

    @property
    def store(self) -> GradingStore:
        return self._store

    def interpret(self, record: MeasurementRecord | Mapping[str, Any]) -> InterpretationResult:
        """Interpret one measurement record.

        Accepts a :class:`MeasurementRecord` or a raw field mapping (form
        values as strings or numbers).  Missing values only ever remove
        findings; they never raise.
        """
        if not isinstance(record, MeasurementRecord):
            record = MeasurementRecord.from_form(record)

        sections = SectionResults(
            spirometry=classify_spirometry(record, self._store),
            bronchodilator=evaluate_bronchodilator(record),
            comparison=compare_with_previous(record),
            lung_volumes=classify_lung_volumes(record, self._store),
            resistance=classify_resistance(record),
            dlco=classify_diffusion(record, self._store),
            oximetry=evaluate_oximetry(record),
        )
        summary = synthesize_summary(sections)
        logger.debug("Interpreted record with %d provided fields: %s", len(record.provided_fields()), summary)
        return InterpretationResult.from_sections(sections, summary)


_default_engine: InterpretationEngine | None = None


def get_default_engine() -> InterpretationEngine:
    """Return a process-wide engine over the packaged grading tables."""
    global _default_engine
    if _default_engine is None:
        _default_engine = InterpretationEngine()
    return _default_engine


def interpret(record: MeasurementRecord | Mapping[str, Any]) -> InterpretationResult:
    """Interpret *record* with the default engine."""
    return get_default_engine().interpret(record)
