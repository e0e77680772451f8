"""Diffusing capacity (DLCO) classifier.

Prefers % predicted.  Without it, falls back to the observed value against
its LLN/ULN; an impaired observed value is graded by scaling it to the
% predicted axis (``observed / LLN * 75``, LLN sitting at ~75% predicted).

Every statement carries the hemoglobin-correction status.
"""

from __future__ import annotations

import logging

from pft_interpreter import constants as c
from pft_interpreter.grading import GradingStore
from pft_interpreter.models.enums import DiffusionLevel
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import DiffusionInterpretation
from pft_interpreter.normalizer import format_fixed

logger = logging.getLogger(__name__)


def classify_diffusion(record: MeasurementRecord, grading: GradingStore) -> DiffusionInterpretation | None:
    suffix = c.HB_CORRECTED_SUFFIX if record.hb_corrected else c.HB_UNCORRECTED_SUFFIX

    if record.dlco_pct is not None:
        return _from_percent_predicted(record.dlco_pct, suffix, grading)
    if record.dlco_obs is not None and record.dlco_lln is not None and record.dlco_uln is not None:
        return _from_limits(record, suffix, grading)

    logger.debug("DLCO skipped: neither % predicted nor observed with LLN/ULN provided")
    return None


def _from_percent_predicted(pct: float, suffix: str, grading: GradingStore) -> DiffusionInterpretation:
    lo, hi = c.DLCO_NORMAL_RANGE
    shown = format_fixed(pct, 0)

    if lo <= pct <= hi:
        return DiffusionInterpretation(
            level=DiffusionLevel.NORMAL,
            statement=f"Normal diffusing capacity {suffix}.",
        )
    if pct > hi:
        return DiffusionInterpretation(
            level=DiffusionLevel.INCREASED,
            statement=f"Increased diffusing capacity {suffix} (DLCO {shown}% predicted).",
        )

    severity = grading.grade("diffusion_impairment", pct)
    return DiffusionInterpretation(
        level=DiffusionLevel.IMPAIRED,
        severity=severity,
        statement=f"{severity} diffusing capacity impairment {suffix} (DLCO {shown}% predicted).",
    )


def _from_limits(record: MeasurementRecord, suffix: str, grading: GradingStore) -> DiffusionInterpretation:
    obs, lln, uln = record.dlco_obs, record.dlco_lln, record.dlco_uln

    if lln <= obs <= uln:
        return DiffusionInterpretation(
            level=DiffusionLevel.NORMAL,
            statement=f"Normal diffusing capacity {suffix}.",
        )
    if obs > uln:
        return DiffusionInterpretation(
            level=DiffusionLevel.INCREASED,
            statement=f"Increased diffusing capacity {suffix}.",
        )

    # a non-positive LLN cannot be scaled; the grade stays Mild
    severity = "Mild"
    if lln > 0:
        estimate = obs / lln * c.DLCO_LLN_PCT_EQUIVALENT
        severity = grading.grade("diffusion_impairment_estimated", estimate)
        logger.debug("DLCO estimated at %.1f%% predicted -> %s", estimate, severity)
    return DiffusionInterpretation(
        level=DiffusionLevel.IMPAIRED,
        severity=severity,
        estimated=True,
        statement=f"{severity} diffusing capacity impairment {suffix}.",
    )
