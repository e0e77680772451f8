"""Summary synthesizer — reconciles every section into one sentence.

"All normal" requires spirometry, lung volumes and DLCO to be free of
abnormality, resistance to be normal, the bronchodilator response to be
"not significant" and resting oximetry (when evaluated) to be normal.  A
missing resistance or bronchodilator result therefore does not count as
normal.  The serial comparison never affects the summary.

Otherwise labels are collected from the section tags in a fixed order:
spirometry, lung volumes, hyperinflation, DLCO, resistance.
"""

from __future__ import annotations

import logging

from pft_interpreter import constants as c
from pft_interpreter.models.enums import (
    BronchodilatorResponse,
    LungVolumePattern,
    ResistanceLevel,
    RestingOximetry,
    SpirometryPattern,
)
from pft_interpreter.models.result import SectionResults

logger = logging.getLogger(__name__)

_SPIROMETRY_LABELS: dict[SpirometryPattern, str] = {
    SpirometryPattern.OBSTRUCTION: "obstructive pattern",
    SpirometryPattern.RESTRICTION: "restrictive spirometry pattern",
    SpirometryPattern.NON_SPECIFIC_RESTRICTIVE: "restrictive spirometry pattern",
    SpirometryPattern.SMALL_AIRWAY: "small airway abnormality",
}

_LUNG_VOLUME_LABELS: dict[LungVolumePattern, str] = {
    LungVolumePattern.RESTRICTION: "restrictive lung disease",
    LungVolumePattern.GAS_TRAPPING: "gas trapping",
}


def is_all_normal(sections: SectionResults) -> bool:
    resistance_normal = (
        sections.resistance is not None and sections.resistance.level is ResistanceLevel.NORMAL
    )
    bronchodilator_normal = sections.bronchodilator.response is BronchodilatorResponse.NOT_SIGNIFICANT
    oximetry_normal = sections.oximetry is None or sections.oximetry.resting is RestingOximetry.NORMAL
    dlco_abnormal = sections.dlco is not None and sections.dlco.abnormal

    return (
        not sections.spirometry.abnormal
        and not sections.lung_volumes.abnormal
        and not dlco_abnormal
        and resistance_normal
        and bronchodilator_normal
        and oximetry_normal
    )


def abnormality_labels(sections: SectionResults) -> list[str]:
    labels: list[str] = []

    spirometry = sections.spirometry
    if spirometry.abnormal and spirometry.pattern in _SPIROMETRY_LABELS:
        labels.append(_SPIROMETRY_LABELS[spirometry.pattern])

    volumes = sections.lung_volumes
    if volumes.abnormal:
        labels.append(_LUNG_VOLUME_LABELS[volumes.pattern])
        if volumes.hyperinflation:
            labels.append("hyperinflation")

    if sections.dlco is not None and sections.dlco.abnormal:
        labels.append("reduced diffusion capacity")

    if sections.resistance is not None and sections.resistance.level is ResistanceLevel.INCREASED:
        labels.append("increased airway resistance")

    return labels


def synthesize_summary(sections: SectionResults) -> str:
    if is_all_normal(sections):
        return c.NORMAL_SUMMARY_TEXT

    labels = abnormality_labels(sections)
    if not labels:
        logger.debug("Not all normal but no abnormality label collected; reporting mixed patterns")
        return c.MIXED_SUMMARY_TEXT
    return f"{c.ABNORMAL_SUMMARY_PREFIX} {', '.join(labels)}."
