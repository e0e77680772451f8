"""InterpretationEngine tests.

Covers the properties every caller relies on: any subset of fields can be
missing without raising, identical input gives identical output, the input
is never mutated, and the narrative fields are a flattening of the tagged
sections.
"""

import pytest

from pft_interpreter import interpret
from pft_interpreter import constants as c
from pft_interpreter.engine import InterpretationEngine, get_default_engine
from pft_interpreter.models.enums import BronchodilatorResponse, SpirometryPattern
from pft_interpreter.models.record import MeasurementRecord

NUMERIC_FIELDS = [
    name for name, info in MeasurementRecord.model_fields.items() if info.annotation is not bool
]

# A record with every section populated.
FULL_RECORD = {
    "fev1_obs": "1.45", "fev1_pct": "52", "fvc_obs": "3.10", "fvc_pct": "94",
    "fev1_fvc_ratio": "47", "fev1_fvc_lln": "68.6",
    "bronchodilator_given": True, "post_fev1_obs": "1.55",
    "has_previous_test": True, "prev_fev1_obs": "1.80", "prev_fvc_obs": "3.2", "prev_dlco_obs": "14",
    "tlc_obs": "7.2", "tlc_pct": "118", "tlc_lln": "4.8", "tlc_uln": "7.0",
    "rv_pct": "175", "rv_tlc_ratio": "58", "rv_tlc_uln": "48",
    "raw_obs": "4.1", "raw_pct": "240",
    "dlco_obs": "12.1", "dlco_pct": "55", "dlco_lln": "15", "dlco_uln": "25",
    "oximetry_performed": True, "age": "67", "resting_spo2": "94",
    "exercise_performed": True, "lowest_exercise_spo2": "86",
}


# =====================================================================
# Construction
# =====================================================================


def test_default_engine_is_shared():
    assert get_default_engine() is get_default_engine()


def test_engine_without_store_loads_packaged_tables():
    engine = InterpretationEngine()
    assert engine.store.get("obstruction_fev1").name == "obstruction_fev1"


def test_module_level_interpret():
    result = interpret({"dlco_pct": "55"})
    assert result.dlco == "Moderate diffusing capacity impairment uncorrected for Hb (DLCO 55% predicted)."


# =====================================================================
# Absence safety
# =====================================================================


class TestAbsence:

    def test_empty_record(self, engine):
        """Nothing provided: only the BD statement and a summary."""
        result = engine.interpret(MeasurementRecord())
        assert result.spirometry == ()
        assert result.bronchodilator == "Bronchodilator not administered."
        assert result.comparison is None
        assert result.lung_volumes == ()
        assert result.resistance is None
        assert result.dlco is None
        assert result.oximetry is None
        assert result.summary == c.MIXED_SUMMARY_TEXT

    @pytest.mark.parametrize("missing", NUMERIC_FIELDS)
    def test_any_single_field_may_be_missing(self, engine, missing):
        data = dict(FULL_RECORD)
        data[missing] = ""
        result = engine.interpret(data)
        assert result.summary.startswith("In summary,")

    @pytest.mark.parametrize("garbage", ["", "abc", "nan", "-inf", None])
    def test_all_fields_garbage(self, engine, garbage):
        data = {name: garbage for name in NUMERIC_FIELDS}
        data.update(bronchodilator_given=True, has_previous_test=True,
                    oximetry_performed=True, exercise_performed=True)
        result = engine.interpret(data)
        assert result.spirometry == ()
        assert result.bronchodilator is None
        assert result.comparison == "Compared to previous: no significant change."
        assert result.oximetry is None


# =====================================================================
# Determinism and purity
# =====================================================================


class TestDeterminism:

    def test_same_input_same_output(self, engine):
        first = engine.interpret(FULL_RECORD)
        second = engine.interpret(FULL_RECORD)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_mapping_and_record_agree(self, engine):
        assert engine.interpret(FULL_RECORD) == engine.interpret(MeasurementRecord.from_form(FULL_RECORD))

    def test_input_mapping_not_mutated(self, engine):
        data = dict(FULL_RECORD)
        engine.interpret(data)
        assert data == FULL_RECORD

    def test_result_is_immutable(self, engine):
        result = engine.interpret(FULL_RECORD)
        with pytest.raises(Exception):
            result.summary = "changed"

    def test_narrative_findings_are_tuples(self, engine):
        """Finding sequences cannot be appended to after construction."""
        result = engine.interpret(FULL_RECORD)
        assert isinstance(result.spirometry, tuple)
        assert isinstance(result.lung_volumes, tuple)
        with pytest.raises(AttributeError):
            result.spirometry.append("extra")


# =====================================================================
# Full record
# =====================================================================


class TestFullRecord:

    @pytest.fixture
    def result(self, engine):
        return engine.interpret(FULL_RECORD)

    def test_narrative_sections(self, result):
        assert result.spirometry == ("Moderately severe airflow reduction (FEV1 52% predicted).",)
        assert result.bronchodilator == "No significant improvement post bronchodilator."
        assert result.lung_volumes == ("Moderate gas trapping.", "TLC shows mild hyperinflation.")
        assert result.resistance == "Increased airway resistance."
        assert result.dlco == "Moderate diffusing capacity impairment uncorrected for Hb (DLCO 55% predicted)."
        assert result.oximetry == "Normal resting oximetry on room air. Marked desaturation with exercise."

    def test_comparison(self, result):
        """FEV1 1.45 vs 1.80 is -19.4%; FVC -3.1% and DLCO -13.6% stay under threshold."""
        assert result.comparison == "Compared to previous: deterioration in FEV1 (19.4%)."

    def test_summary(self, result):
        assert result.summary == (
            "In summary, pulmonary function testing demonstrates obstructive pattern, gas trapping, "
            "hyperinflation, reduced diffusion capacity, increased airway resistance."
        )

    def test_tagged_sections(self, result):
        sections = result.sections
        assert sections.spirometry.pattern is SpirometryPattern.OBSTRUCTION
        assert sections.spirometry.severity == "Moderately severe"
        assert sections.bronchodilator.response is BronchodilatorResponse.NOT_SIGNIFICANT
        assert sections.lung_volumes.hyperinflation_severity == "Mild"

    def test_narrative_is_flattened_from_sections(self, result):
        sections = result.sections
        assert result.spirometry == sections.spirometry.findings
        assert result.lung_volumes == sections.lung_volumes.findings
        assert result.bronchodilator == sections.bronchodilator.statement
        assert result.dlco == sections.dlco.statement

    def test_json_serializable(self, result):
        dumped = result.model_dump(mode="json")
        assert dumped["sections"]["spirometry"]["pattern"] == "obstruction"
        assert dumped["summary"] == result.summary


# =====================================================================
# Implausible but finite values
# =====================================================================


class TestExtremeValues:
    """No plausibility checks are applied; large finite values still render."""

    def test_huge_dlco_percent(self, engine):
        result = engine.interpret({"dlco_pct": 1e30})
        assert result.dlco == (
            f"Increased diffusing capacity uncorrected for Hb (DLCO {int(1e30)}% predicted)."
        )

    def test_huge_ratio(self, engine):
        result = engine.interpret({"fev1_fvc_ratio": 1e30, "fev1_fvc_lln": 1e31})
        assert result.spirometry == (f"Mild airflow reduction (FEV1/FVC {int(1e30)}%).",)

    def test_tiny_previous_value(self, engine):
        result = engine.interpret({"has_previous_test": True, "fev1_obs": 1.0, "prev_fev1_obs": 1e-30})
        assert result.comparison.startswith("Compared to previous: improvement in FEV1 (")
        assert result.sections.comparison.changes[0].metric == "FEV1"

    def test_overflowing_change_is_skipped(self, engine):
        result = engine.interpret({"has_previous_test": True, "fev1_obs": 1e308, "prev_fev1_obs": 1e-308})
        assert result.comparison == "Compared to previous: no significant change."
