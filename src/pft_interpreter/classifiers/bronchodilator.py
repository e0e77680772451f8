"""Bronchodilator response: FEV1 change of >= 200 mL AND >= 12%."""

from __future__ import annotations

import logging

from pft_interpreter import constants as c
from pft_interpreter.models.enums import BronchodilatorResponse
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import BronchodilatorInterpretation
from pft_interpreter.normalizer import percent_change

logger = logging.getLogger(__name__)


def evaluate_bronchodilator(record: MeasurementRecord) -> BronchodilatorInterpretation:
    if not record.bronchodilator_given:
        return BronchodilatorInterpretation(
            response=BronchodilatorResponse.NOT_ADMINISTERED,
            statement=c.BD_NOT_ADMINISTERED_TEXT,
        )

    pre, post = record.fev1_obs, record.post_fev1_obs
    if pre is None or post is None:
        logger.debug("Bronchodilator response not evaluated: pre or post FEV1 missing")
        return BronchodilatorInterpretation(response=BronchodilatorResponse.NOT_EVALUATED)

    delta = post - pre
    pct = percent_change(post, pre)
    significant = (
        delta >= c.BD_MIN_ABSOLUTE_CHANGE_L
        and pct is not None
        and pct >= c.BD_MIN_PERCENT_CHANGE
    )
    logger.debug("Bronchodilator delta=%.3f L, pct=%s, significant=%s", delta, pct, significant)

    if significant:
        response, statement = BronchodilatorResponse.SIGNIFICANT, c.BD_SIGNIFICANT_TEXT
    else:
        response, statement = BronchodilatorResponse.NOT_SIGNIFICANT, c.BD_NOT_SIGNIFICANT_TEXT
    return BronchodilatorInterpretation(
        response=response,
        absolute_change=delta,
        percent_change=pct,
        statement=statement,
    )
