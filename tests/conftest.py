import pytest

from pft_interpreter.engine import InterpretationEngine
from pft_interpreter.grading import GradingStore
from pft_interpreter.models.record import MeasurementRecord


@pytest.fixture(scope="session")
def store():
    """Packaged grading tables, loaded once for the whole session."""
    return GradingStore().load()


@pytest.fixture(scope="session")
def engine(store):
    return InterpretationEngine(store)


@pytest.fixture
def record():
    """Factory fixture: ``record(fev1_pct=65, ...)`` -> MeasurementRecord."""
    return lambda **fields: MeasurementRecord(**fields)
