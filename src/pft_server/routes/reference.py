"""Reference data endpoints — severity grading tables.

Read-only endpoints exposing the tables loaded from ``grading.yaml`` (and the
guideline they come from) so consumers can show how a severity word was
derived.
"""

from fastapi import APIRouter, Depends

from pft_interpreter.constants import GUIDELINE_REFERENCE
from pft_interpreter.grading import GradingStore, GradingTable

from pft_server.dependencies import get_store

router = APIRouter(prefix="/reference", tags=["reference"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/grading")
def list_grading_tables(
    store: GradingStore = Depends(get_store),
) -> list[GradingTable]:
    """Return every grading table in file order."""
    return list(store.tables.values())


@router.get("/grading/{name}")
def get_grading_table(
    name: str,
    store: GradingStore = Depends(get_store),
) -> GradingTable:
    """Return one grading table; unknown names map to 404 via ``KeyError``."""
    return store.get(name)


@router.get("/guideline")
def get_guideline() -> dict:
    """Return the published rule set the interpretations follow."""
    return {"guideline": GUIDELINE_REFERENCE}
