"""Summary synthesizer tests.

Sections are built directly from tagged models so the summary rules are
exercised independently of the classifiers.
"""

import pytest

from pft_interpreter import constants as c
from pft_interpreter.models.enums import (
    BronchodilatorResponse,
    DiffusionLevel,
    LungVolumePattern,
    ResistanceLevel,
    RestingOximetry,
    SerialDirection,
    SpirometryPattern,
)
from pft_interpreter.models.result import (
    BronchodilatorInterpretation,
    ComparisonInterpretation,
    DiffusionInterpretation,
    LungVolumeInterpretation,
    OximetryInterpretation,
    ResistanceInterpretation,
    SectionResults,
    SerialChange,
    SpirometryInterpretation,
)
from pft_interpreter.summary import abnormality_labels, is_all_normal, synthesize_summary


def _normal_sections(**overrides) -> SectionResults:
    base = dict(
        spirometry=SpirometryInterpretation(pattern=SpirometryPattern.NORMAL, findings=("Normal spirometry.",)),
        bronchodilator=BronchodilatorInterpretation(
            response=BronchodilatorResponse.NOT_SIGNIFICANT, statement=c.BD_NOT_SIGNIFICANT_TEXT,
        ),
        lung_volumes=LungVolumeInterpretation(pattern=LungVolumePattern.NORMAL),
        resistance=ResistanceInterpretation(level=ResistanceLevel.NORMAL, statement="Normal airway resistance."),
        dlco=DiffusionInterpretation(level=DiffusionLevel.NORMAL, statement="Normal diffusing capacity."),
    )
    base.update(overrides)
    return SectionResults(**base)


_OBSTRUCTION = SpirometryInterpretation(pattern=SpirometryPattern.OBSTRUCTION, severity="Mild")
_GAS_TRAPPING = LungVolumeInterpretation(pattern=LungVolumePattern.GAS_TRAPPING, hyperinflation=True)
_IMPAIRED_DLCO = DiffusionInterpretation(level=DiffusionLevel.IMPAIRED, severity="Mild", statement="x")
_HIGH_RAW = ResistanceInterpretation(level=ResistanceLevel.INCREASED, statement="Increased airway resistance.")


# =====================================================================
# All normal
# =====================================================================


class TestAllNormal:

    def test_normal_sentence(self):
        sections = _normal_sections()
        assert is_all_normal(sections) is True
        assert synthesize_summary(sections) == "In summary, normal pulmonary function testing."

    def test_dlco_not_evaluated_is_normal(self):
        assert is_all_normal(_normal_sections(dlco=None)) is True

    def test_increased_dlco_and_large_tlc_are_normal(self):
        sections = _normal_sections(
            dlco=DiffusionInterpretation(level=DiffusionLevel.INCREASED, statement="x"),
            lung_volumes=LungVolumeInterpretation(pattern=LungVolumePattern.LARGE_NORMAL_VARIANT),
        )
        assert is_all_normal(sections) is True

    def test_serial_deterioration_is_ignored(self):
        comparison = ComparisonInterpretation(
            changes=(SerialChange(metric="FEV1", direction=SerialDirection.DETERIORATION, percent_change=-20),),
            statement="Compared to previous: deterioration in FEV1 (20.0%).",
        )
        assert synthesize_summary(_normal_sections(comparison=comparison)) == c.NORMAL_SUMMARY_TEXT

    def test_normal_oximetry_keeps_all_normal(self):
        oximetry = OximetryInterpretation(resting=RestingOximetry.NORMAL, resting_threshold=96, statement="x")
        assert is_all_normal(_normal_sections(oximetry=oximetry)) is True


# =====================================================================
# Not all normal without a label -> mixed patterns
# =====================================================================


class TestMixedPatterns:

    @pytest.mark.parametrize(
        "overrides",
        [
            {"resistance": None},
            {"bronchodilator": BronchodilatorInterpretation(response=BronchodilatorResponse.NOT_ADMINISTERED)},
            {"bronchodilator": BronchodilatorInterpretation(response=BronchodilatorResponse.NOT_EVALUATED)},
            {"bronchodilator": BronchodilatorInterpretation(response=BronchodilatorResponse.SIGNIFICANT)},
            {"resistance": ResistanceInterpretation(level=ResistanceLevel.REDUCED, statement="x")},
            {"oximetry": OximetryInterpretation(resting=RestingOximetry.REDUCED, resting_threshold=94, statement="x")},
            {"spirometry": SpirometryInterpretation(pattern=SpirometryPattern.INCREASED_MID_FLOWS)},
        ],
        ids=[
            "resistance-missing",
            "bd-not-administered",
            "bd-not-evaluated",
            "bd-significant",
            "resistance-reduced",
            "oximetry-reduced",
            "increased-mid-flows",
        ],
    )
    def test_unlabelled_abnormality(self, overrides):
        sections = _normal_sections(**overrides)
        assert is_all_normal(sections) is False
        assert abnormality_labels(sections) == []
        assert synthesize_summary(sections) == c.MIXED_SUMMARY_TEXT


# =====================================================================
# Labels
# =====================================================================


class TestLabels:

    def test_fixed_label_order(self):
        sections = _normal_sections(
            spirometry=_OBSTRUCTION,
            lung_volumes=_GAS_TRAPPING,
            dlco=_IMPAIRED_DLCO,
            resistance=_HIGH_RAW,
        )
        assert synthesize_summary(sections) == (
            "In summary, pulmonary function testing demonstrates obstructive pattern, gas trapping, "
            "hyperinflation, reduced diffusion capacity, increased airway resistance."
        )

    def test_single_label(self):
        sections = _normal_sections(dlco=_IMPAIRED_DLCO)
        assert synthesize_summary(sections) == (
            "In summary, pulmonary function testing demonstrates reduced diffusion capacity."
        )

    @pytest.mark.parametrize(
        "pattern, label",
        [
            (SpirometryPattern.OBSTRUCTION, "obstructive pattern"),
            (SpirometryPattern.RESTRICTION, "restrictive spirometry pattern"),
            (SpirometryPattern.NON_SPECIFIC_RESTRICTIVE, "restrictive spirometry pattern"),
            (SpirometryPattern.SMALL_AIRWAY, "small airway abnormality"),
        ],
    )
    def test_spirometry_labels(self, pattern, label):
        sections = _normal_sections(spirometry=SpirometryInterpretation(pattern=pattern))
        assert abnormality_labels(sections) == [label]

    def test_explained_restriction_keeps_label(self):
        """No spirometry text is emitted, but the tag still reaches the summary."""
        spirometry = SpirometryInterpretation(pattern=SpirometryPattern.RESTRICTION, findings=())
        assert abnormality_labels(_normal_sections(spirometry=spirometry)) == ["restrictive spirometry pattern"]

    def test_restrictive_lung_disease(self):
        volumes = LungVolumeInterpretation(pattern=LungVolumePattern.RESTRICTION, severity="Mild")
        assert abnormality_labels(_normal_sections(lung_volumes=volumes)) == ["restrictive lung disease"]

    def test_gas_trapping_without_hyperinflation(self):
        volumes = LungVolumeInterpretation(pattern=LungVolumePattern.GAS_TRAPPING)
        assert abnormality_labels(_normal_sections(lung_volumes=volumes)) == ["gas trapping"]

    def test_reduced_resistance_has_no_label(self):
        sections = _normal_sections(
            spirometry=_OBSTRUCTION,
            resistance=ResistanceInterpretation(level=ResistanceLevel.REDUCED, statement="x"),
        )
        assert abnormality_labels(sections) == ["obstructive pattern"]
