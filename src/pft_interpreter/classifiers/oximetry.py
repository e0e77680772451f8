"""Oximetry evaluator: age-banded resting SpO2 plus exercise desaturation."""

from __future__ import annotations

import logging

from pft_interpreter import constants as c
from pft_interpreter.models.enums import ExerciseDesaturation, RestingOximetry
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import OximetryInterpretation

logger = logging.getLogger(__name__)

_RESTING_TEXT = {
    RestingOximetry.NORMAL: "Normal resting oximetry on room air.",
    RestingOximetry.REDUCED: "Reduced resting oximetry on room air.",
}
_EXERCISE_TEXT = {
    ExerciseDesaturation.NONE: "No significant desaturation with exercise.",
    ExerciseDesaturation.MILD: "Mild desaturation with exercise.",
    ExerciseDesaturation.MARKED: "Marked desaturation with exercise.",
}


def resting_spo2_threshold(age: float | None) -> float:
    """Lowest normal resting SpO2 for *age*; first matching band wins.

    Band bounds are inclusive except the open-ended top band, whose lower
    bound is exclusive.  Ages below 18, between bands, or not provided use
    the default.
    """
    if age is None:
        return c.DEFAULT_RESTING_SPO2
    for lo, hi, threshold in c.RESTING_SPO2_AGE_BANDS:
        if hi is None:
            if age > lo:
                return threshold
        elif lo <= age <= hi:
            return threshold
    return c.DEFAULT_RESTING_SPO2


def evaluate_oximetry(record: MeasurementRecord) -> OximetryInterpretation | None:
    if not record.oximetry_performed or record.resting_spo2 is None:
        return None

    resting_spo2 = record.resting_spo2
    threshold = resting_spo2_threshold(record.age)
    resting = RestingOximetry.NORMAL if resting_spo2 >= threshold else RestingOximetry.REDUCED
    sentences = [_RESTING_TEXT[resting]]

    exercise = None
    drop = None
    lowest = record.lowest_exercise_spo2
    if record.exercise_performed and lowest is not None:
        drop = resting_spo2 - lowest
        if drop <= c.EXERCISE_DESATURATION_DROP:
            exercise = ExerciseDesaturation.NONE
        elif lowest > c.MARKED_DESATURATION_FLOOR:
            exercise = ExerciseDesaturation.MILD
        else:
            exercise = ExerciseDesaturation.MARKED
        sentences.append(_EXERCISE_TEXT[exercise])

    logger.debug(
        "Oximetry resting=%s (threshold %.0f), exercise=%s", resting_spo2, threshold, exercise,
    )
    return OximetryInterpretation(
        resting=resting,
        resting_threshold=threshold,
        exercise=exercise,
        exercise_drop=drop,
        statement=" ".join(sentences),
    )
