"""pft_interpreter — rule-based pulmonary function test interpretation.

Public API:
    interpret             — interpret one record with the default engine
    InterpretationEngine  — engine bound to a specific GradingStore
    GradingStore          — loads severity grading tables from YAML
    MeasurementRecord     — immutable input record (raw form text accepted)
    InterpretationResult  — narrative output plus tagged sections
    parse_measurement     — raw field value -> float or None

Section models and category tags are re-exported from
``pft_interpreter.models``.
"""

from pft_interpreter.engine import InterpretationEngine, get_default_engine, interpret
from pft_interpreter.grading import GradeBand, GradingStore, GradingTable
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import InterpretationResult, SectionResults
from pft_interpreter.normalizer import parse_measurement

__version__ = "0.1.0"

__all__ = [
    # Engine
    "InterpretationEngine",
    "get_default_engine",
    "interpret",
    # Grading tables
    "GradeBand",
    "GradingStore",
    "GradingTable",
    # Records
    "InterpretationResult",
    "MeasurementRecord",
    "SectionResults",
    "parse_measurement",
]
