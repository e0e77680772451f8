"""Serial comparison against the previous test.

FEV1, FVC and DLCO are compared independently; each needs both the current
and the previous observed value.  Significant changes are reported in that
fixed order.
"""

from __future__ import annotations

import logging

from pft_interpreter import constants as c
from pft_interpreter.models.enums import SerialDirection
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import ComparisonInterpretation, SerialChange
from pft_interpreter.normalizer import format_fixed, percent_change

logger = logging.getLogger(__name__)


def _serial_metrics(record: MeasurementRecord) -> list[tuple[str, float | None, float | None, float]]:
    """(metric, current, previous, significance threshold) in report order."""
    return [
        ("FEV1", record.fev1_obs, record.prev_fev1_obs, c.SERIAL_FEV1_THRESHOLD),
        ("FVC", record.fvc_obs, record.prev_fvc_obs, c.SERIAL_FVC_THRESHOLD),
        ("DLCO", record.dlco_obs, record.prev_dlco_obs, c.SERIAL_DLCO_THRESHOLD),
    ]


def compare_with_previous(record: MeasurementRecord) -> ComparisonInterpretation | None:
    """Return ``None`` when no previous test was supplied."""
    if not record.has_previous_test:
        return None

    changes: list[SerialChange] = []
    for metric, current, previous, threshold in _serial_metrics(record):
        pct = percent_change(current, previous)
        if pct is None:
            logger.debug("Serial %s skipped: value missing or previous is zero", metric)
            continue
        if abs(pct) > threshold:
            direction = SerialDirection.IMPROVEMENT if pct > 0 else SerialDirection.DETERIORATION
            changes.append(SerialChange(metric=metric, direction=direction, percent_change=pct))

    if changes:
        described = ", ".join(
            f"{ch.direction.value} in {ch.metric} ({format_fixed(ch.magnitude, 1)}%)"
            for ch in changes
        )
        statement = f"{c.SERIAL_PREFIX} {described}."
    else:
        statement = f"{c.SERIAL_PREFIX} no significant change."
    return ComparisonInterpretation(changes=tuple(changes), statement=statement)
