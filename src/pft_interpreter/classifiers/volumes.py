"""Lung volume classifier (plethysmography).

Gas trapping (RV/TLC above its ULN) is checked first; TLC is then read
against its LLN/ULN for hyperinflation, a large normal variant, or
restriction.  All of RV/TLC, its ULN, and TLC observed/LLN/ULN must be
present, otherwise the section is empty.

When the % predicted value used for grading is missing the finding is still
reported, without a severity word.
"""

from __future__ import annotations

import logging

from pft_interpreter.grading import GradingStore
from pft_interpreter.models.enums import LungVolumePattern
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import LungVolumeInterpretation

logger = logging.getLogger(__name__)


def _graded(severity: str | None, noun: str) -> str:
    """'Mild' + 'gas trapping' -> 'Mild gas trapping'; no severity -> 'Gas trapping'."""
    if severity is None:
        return noun[:1].upper() + noun[1:]
    return f"{severity} {noun}"


def classify_lung_volumes(record: MeasurementRecord, grading: GradingStore) -> LungVolumeInterpretation:
    required = (record.rv_tlc_ratio, record.rv_tlc_uln, record.tlc_obs, record.tlc_lln, record.tlc_uln)
    if any(value is None for value in required):
        logger.debug("Lung volumes skipped: RV/TLC, TLC or their limits not provided")
        return LungVolumeInterpretation()

    if record.rv_tlc_ratio > record.rv_tlc_uln:
        return _classify_gas_trapping(record, grading)

    if record.tlc_obs > record.tlc_uln:
        return LungVolumeInterpretation(
            pattern=LungVolumePattern.LARGE_NORMAL_VARIANT,
            findings=("Large TLC, normal variant.",),
        )
    if record.tlc_obs >= record.tlc_lln:
        return LungVolumeInterpretation(
            pattern=LungVolumePattern.NORMAL,
            findings=("Normal lung volumes.",),
        )

    severity = grading.grade("restriction", record.tlc_pct)
    return LungVolumeInterpretation(
        pattern=LungVolumePattern.RESTRICTION,
        severity=severity,
        findings=(f"{_graded(severity, 'restriction')}.",),
    )


def _classify_gas_trapping(record: MeasurementRecord, grading: GradingStore) -> LungVolumeInterpretation:
    severity = grading.grade("gas_trapping", record.rv_pct)
    findings = [f"{_graded(severity, 'gas trapping')}."]
    hyperinflation = False
    hyperinflation_severity = None

    if record.tlc_obs > record.tlc_uln:
        hyperinflation = True
        hyperinflation_severity = grading.grade("hyperinflation", record.tlc_pct)
        if hyperinflation_severity is None:
            findings.append("TLC shows hyperinflation.")
        else:
            findings.append(f"TLC shows {hyperinflation_severity.lower()} hyperinflation.")
    elif record.tlc_obs >= record.tlc_lln:
        findings.append("Normal TLC.")

    logger.debug("Gas trapping graded %s, hyperinflation=%s", severity, hyperinflation)
    return LungVolumeInterpretation(
        pattern=LungVolumePattern.GAS_TRAPPING,
        severity=severity,
        hyperinflation=hyperinflation,
        hyperinflation_severity=hyperinflation_severity,
        findings=tuple(findings),
    )
