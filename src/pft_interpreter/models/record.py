"""MeasurementRecord — the immutable input of one interpretation run.

Every numeric field is optional.  Raw form text can be passed straight in:
a ``before`` validator runs each numeric field through
:func:`~pft_interpreter.normalizer.parse_measurement`, so blanks, typos,
NaN and infinities arrive as ``None`` instead of failing validation.

Field naming convention:
    ``*_obs``   observed value (L, L/s, mL/min/mmHg, cmH2O/L/s)
    ``*_pct``   percent of predicted
    ``*_lln``   lower limit of normal
    ``*_uln``   upper limit of normal
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from pft_interpreter.normalizer import parse_measurement


class MeasurementRecord(BaseModel):
    """Flat set of PFT measurements plus the flags that steer branch selection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # --- Spirometry (pre-bronchodilator) ---
    fev1_obs: Optional[float] = None
    fev1_pct: Optional[float] = None
    fvc_obs: Optional[float] = None
    fvc_pct: Optional[float] = None
    vc_obs: Optional[float] = None
    vc_pct: Optional[float] = None
    # FEV1/FVC as a percentage, and its LLN
    fev1_fvc_ratio: Optional[float] = None
    fev1_fvc_lln: Optional[float] = None
    fef25_75_obs: Optional[float] = None
    fef25_75_pct: Optional[float] = None
    fef75_fvc_ratio: Optional[float] = None
    fef50_fvc_ratio: Optional[float] = None

    # --- Post-bronchodilator spirometry ---
    bronchodilator_given: bool = False
    post_fev1_obs: Optional[float] = None
    post_fvc_obs: Optional[float] = None

    # --- Previous test ---
    has_previous_test: bool = False
    prev_fev1_obs: Optional[float] = None
    prev_fvc_obs: Optional[float] = None
    prev_dlco_obs: Optional[float] = None

    # --- Lung volumes ---
    tlc_obs: Optional[float] = None
    tlc_pct: Optional[float] = None
    tlc_lln: Optional[float] = None
    tlc_uln: Optional[float] = None
    rv_obs: Optional[float] = None
    rv_pct: Optional[float] = None
    # RV/TLC as a percentage, and its ULN
    rv_tlc_ratio: Optional[float] = None
    rv_tlc_uln: Optional[float] = None

    # --- Airway resistance ---
    raw_obs: Optional[float] = None
    raw_pct: Optional[float] = None
    raw_lln: Optional[float] = None
    raw_uln: Optional[float] = None

    # --- DLCO ---
    dlco_obs: Optional[float] = None
    dlco_pct: Optional[float] = None
    dlco_lln: Optional[float] = None
    dlco_uln: Optional[float] = None
    hb_corrected: bool = False

    # --- Clinical context ---
    # Evident cause of restriction in the reason for referral, or restriction
    # already known from plethysmography.
    restriction_explained: bool = False

    # --- Oximetry ---
    oximetry_performed: bool = False
    age: Optional[float] = None
    resting_spo2: Optional[float] = None
    exercise_performed: bool = False
    lowest_exercise_spo2: Optional[float] = None

    @field_validator(
        "fev1_obs", "fev1_pct", "fvc_obs", "fvc_pct", "vc_obs", "vc_pct",
        "fev1_fvc_ratio", "fev1_fvc_lln", "fef25_75_obs", "fef25_75_pct",
        "fef75_fvc_ratio", "fef50_fvc_ratio",
        "post_fev1_obs", "post_fvc_obs",
        "prev_fev1_obs", "prev_fvc_obs", "prev_dlco_obs",
        "tlc_obs", "tlc_pct", "tlc_lln", "tlc_uln",
        "rv_obs", "rv_pct", "rv_tlc_ratio", "rv_tlc_uln",
        "raw_obs", "raw_pct", "raw_lln", "raw_uln",
        "dlco_obs", "dlco_pct", "dlco_lln", "dlco_uln",
        "age", "resting_spo2", "lowest_exercise_spo2",
        mode="before",
    )
    @classmethod
    def _normalize_measurement(cls, value: Any) -> float | None:
        return parse_measurement(value)

    @field_validator(
        "bronchodilator_given", "has_previous_test", "hb_corrected",
        "restriction_explained", "oximetry_performed", "exercise_performed",
        mode="before",
    )
    @classmethod
    def _unchecked_box_is_false(cls, value: Any) -> Any:
        # an unchecked checkbox may arrive as null or an empty string
        if value is None or (isinstance(value, str) and not value.strip()):
            return False
        return value

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "MeasurementRecord":
        """Build a record from a raw field mapping; unknown keys are ignored."""
        return cls.model_validate(dict(data))

    def provided_fields(self) -> list[str]:
        """Names of the numeric fields that carry a value."""
        return [
            name for name, value in self
            if value is not None and not isinstance(value, bool)
        ]
