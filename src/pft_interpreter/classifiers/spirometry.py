"""Spirometry classifier.

Branches on the FEV1/FVC ratio against its LLN:

  - **below LLN**: airflow reduction.  Severity comes from FEV1 % predicted
    when FVC (or VC) is 90-110% predicted, otherwise from the ratio itself.
  - **at or above LLN**: FEV1 and FVC % predicted against a fixed 80%
    cut-off for a restrictive spirometry pattern, then small-airway flows.

Without both the ratio and its LLN the section is empty.
"""

from __future__ import annotations

import logging

from pft_interpreter import constants as c
from pft_interpreter.grading import GradingStore
from pft_interpreter.models.enums import SpirometryPattern
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import SpirometryInterpretation
from pft_interpreter.normalizer import format_fixed, in_range

logger = logging.getLogger(__name__)


def classify_spirometry(record: MeasurementRecord, grading: GradingStore) -> SpirometryInterpretation:
    ratio = record.fev1_fvc_ratio
    lln = record.fev1_fvc_lln
    if ratio is None or lln is None:
        logger.debug("Spirometry skipped: FEV1/FVC ratio or LLN not provided")
        return SpirometryInterpretation()

    if ratio < lln:
        return _classify_obstruction(record, grading)
    return _classify_normal_ratio(record)


def _classify_obstruction(record: MeasurementRecord, grading: GradingStore) -> SpirometryInterpretation:
    ratio = record.fev1_fvc_ratio
    vc_pct = record.vc_pct if record.vc_pct is not None else record.fvc_pct
    volume_in_range = in_range(record.fvc_pct, c.FVC_NORMAL_RANGE) or in_range(vc_pct, c.FVC_NORMAL_RANGE)

    if volume_in_range and record.fev1_pct is not None:
        severity = grading.grade("obstruction_fev1", record.fev1_pct)
        finding = f"{severity} airflow reduction (FEV1 {format_fixed(record.fev1_pct, 0)}% predicted)."
    else:
        # FEV1 % predicted missing grades from the ratio as well
        severity = grading.grade("obstruction_ratio", ratio)
        finding = f"{severity} airflow reduction (FEV1/FVC {format_fixed(ratio, 0)}%)."

    logger.debug("Obstruction graded %s (volume in range: %s)", severity, volume_in_range)
    return SpirometryInterpretation(
        pattern=SpirometryPattern.OBSTRUCTION,
        severity=severity,
        findings=(finding,),
    )


def _classify_normal_ratio(record: MeasurementRecord) -> SpirometryInterpretation:
    fev1_low = record.fev1_pct is not None and record.fev1_pct < c.RESTRICTIVE_PCT_THRESHOLD
    fvc_low = record.fvc_pct is not None and record.fvc_pct < c.RESTRICTIVE_PCT_THRESHOLD

    if fev1_low and fvc_low:
        findings = [c.PROPORTIONAL_REDUCTION_TEXT]
        if not record.restriction_explained:
            findings.append(c.NON_SPECIFIC_RESTRICTIVE_TEXT)
        return SpirometryInterpretation(
            pattern=SpirometryPattern.NON_SPECIFIC_RESTRICTIVE,
            findings=tuple(findings),
        )

    if (fev1_low or fvc_low) and not in_range(record.fvc_pct, c.FVC_NORMAL_RANGE):
        findings = () if record.restriction_explained else (c.RESTRICTIVE_PATTERN_TEXT,)
        return SpirometryInterpretation(pattern=SpirometryPattern.RESTRICTION, findings=findings)

    return _classify_small_airways(record)


def _classify_small_airways(record: MeasurementRecord) -> SpirometryInterpretation:
    flows: list[str] = []

    if (
        record.fef25_75_obs is not None
        and record.fef25_75_pct is not None
        and record.fef25_75_pct < c.FEF25_75_PCT_THRESHOLD
    ):
        flows.append(c.LOW_VOLUME_FLOW_FINDING)

    if record.fef50_fvc_ratio is not None and record.fef50_fvc_ratio > c.FEF50_FVC_RATIO_THRESHOLD:
        flows.append(c.MID_VOLUME_FLOW_FINDING)

    if (
        record.fef75_fvc_ratio is not None
        and record.fef75_fvc_ratio < c.FEF75_FVC_RATIO_THRESHOLD
        and c.LOW_VOLUME_FLOW_FINDING not in flows
    ):
        flows.append(c.LOW_VOLUME_FLOW_FINDING)

    if not flows:
        return SpirometryInterpretation(
            pattern=SpirometryPattern.NORMAL,
            findings=(c.NORMAL_SPIROMETRY_TEXT,),
        )

    if c.LOW_VOLUME_FLOW_FINDING in flows:
        pattern = SpirometryPattern.SMALL_AIRWAY
    else:
        pattern = SpirometryPattern.INCREASED_MID_FLOWS
    return SpirometryInterpretation(
        pattern=pattern,
        findings=(f"Normal FEV1/FVC ratio with {' and '.join(flows)}.",),
    )
