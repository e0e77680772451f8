"""PFT interpretation constants shared across the engine.

Thresholds and statement texts follow the University of Toronto PFT
interpretation guidelines (10th edition, 2023).  Severity grading tables
live in ``rules/grading.yaml``; everything here is a single cut point or a
fixed sentence used by one classifier.

Unlike deployment settings, these values are never read from the
environment: the rule set is fixed and interpretations must be reproducible.
"""

GUIDELINE_REFERENCE = "University of Toronto Guidelines - 10th Edition (2023)"

# --- Spirometry ---
# FVC (or VC) within this % predicted range selects FEV1-based obstruction grading.
FVC_NORMAL_RANGE: tuple[float, float] = (90.0, 110.0)
# Fixed cut-off used for the restrictive spirometry pattern (stands in for LLN).
RESTRICTIVE_PCT_THRESHOLD = 80.0
FEF25_75_PCT_THRESHOLD = 50.0
FEF75_FVC_RATIO_THRESHOLD = 0.25
FEF50_FVC_RATIO_THRESHOLD = 1.5

LOW_VOLUME_FLOW_FINDING = "airflow reduction at low lung volumes"
MID_VOLUME_FLOW_FINDING = "increased flows at mid lung volumes"

PROPORTIONAL_REDUCTION_TEXT = "Proportional reduction in FEV1 and FVC."
NON_SPECIFIC_RESTRICTIVE_TEXT = (
    "Presence of a non-specific restrictive spirometry pattern, which can "
    "represent restriction (consider lung volume testing to verify), or can "
    "sometimes predict later evolution into COPD or restrictive lung disease "
    "– clinical correlation required."
)
RESTRICTIVE_PATTERN_TEXT = (
    "Presence of a restrictive spirometry pattern, which is a non-specific "
    "finding that can sometimes predict evolution into COPD or restrictive "
    "lung disease – clinical correlation required."
)
NORMAL_SPIROMETRY_TEXT = "Normal spirometry."

# --- Bronchodilator response (>= 200 mL AND >= 12%) ---
BD_MIN_ABSOLUTE_CHANGE_L = 0.2
BD_MIN_PERCENT_CHANGE = 12.0

BD_NOT_ADMINISTERED_TEXT = "Bronchodilator not administered."
BD_SIGNIFICANT_TEXT = (
    "Significant improvement post bronchodilator. Consistent with a diagnosis "
    "of asthma, clinical correlation is required."
)
BD_NOT_SIGNIFICANT_TEXT = "No significant improvement post bronchodilator."

# --- Comparison with a previous test (absolute % change must exceed) ---
SERIAL_FEV1_THRESHOLD = 10.0
SERIAL_FVC_THRESHOLD = 10.0
SERIAL_DLCO_THRESHOLD = 15.0

SERIAL_PREFIX = "Compared to previous:"

# --- Airway resistance (% predicted fallbacks) ---
RAW_PCT_INCREASED = 177.0
RAW_PCT_REDUCED = 66.0

# --- DLCO ---
DLCO_NORMAL_RANGE: tuple[float, float] = (75.0, 125.0)
# LLN is taken to sit at roughly 75% predicted when estimating severity
# from the observed value.
DLCO_LLN_PCT_EQUIVALENT = 75.0

HB_CORRECTED_SUFFIX = "after Hb correction"
HB_UNCORRECTED_SUFFIX = "uncorrected for Hb"

# --- Oximetry ---
# (min_age, max_age, lowest normal resting SpO2), bounds inclusive.
# max_age None means any age strictly above min_age.
RESTING_SPO2_AGE_BANDS: list[tuple[float, float | None, float]] = [
    (18, 44, 96.0),
    (45, 64, 94.0),
    (64, None, 93.0),
]
# Used below 18, between bands, or when age is not provided.
DEFAULT_RESTING_SPO2 = 96.0
# A sustained drop greater than this many points is significant.
EXERCISE_DESATURATION_DROP = 4.0
# Lowest exercise SpO2 above this value is a mild (not marked) desaturation.
MARKED_DESATURATION_FLOOR = 88.0

# --- Summary ---
NORMAL_SUMMARY_TEXT = "In summary, normal pulmonary function testing."
ABNORMAL_SUMMARY_PREFIX = "In summary, pulmonary function testing demonstrates"
MIXED_SUMMARY_TEXT = (
    "In summary, pulmonary function testing shows mixed patterns requiring "
    "clinical correlation."
)
