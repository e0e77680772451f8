"""Interpretation endpoints.

Both endpoints are stateless: the record in the request body is
interpreted and the result returned; nothing is stored.  Numeric fields
accept numbers or raw form text; blanks and unparseable values are
treated as "not provided", never as zero.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pft_interpreter.engine import InterpretationEngine
from pft_interpreter.models.record import MeasurementRecord
from pft_interpreter.models.result import InterpretationResult

from pft_server.config import ServerSettings
from pft_server.dependencies import get_engine, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["interpret"])


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class BatchInterpretRequest(BaseModel):
    """Body for POST /interpret/batch."""
    records: list[MeasurementRecord]


class BatchInterpretResponse(BaseModel):
    """Results in the same order as the submitted records."""
    results: list[InterpretationResult]


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/interpret")
def interpret_record(
    record: MeasurementRecord,
    engine: InterpretationEngine = Depends(get_engine),
) -> InterpretationResult:
    """Interpret a single measurement record."""
    return engine.interpret(record)


@router.post("/interpret/batch")
def interpret_batch(
    body: BatchInterpretRequest,
    engine: InterpretationEngine = Depends(get_engine),
    settings: ServerSettings = Depends(get_settings),
) -> BatchInterpretResponse:
    """Interpret several independent records in one request.

    Raises ``ValueError`` (mapped to 400/413) for an empty batch or one
    larger than ``SERVER_MAX_BATCH_SIZE``.
    """
    if not body.records:
        raise ValueError("Batch contains no records")
    if len(body.records) > settings.max_batch_size:
        raise ValueError(
            f"Batch of {len(body.records)} records exceeds limit of {settings.max_batch_size}"
        )

    logger.info("Interpreting batch of %d records", len(body.records))
    return BatchInterpretResponse(results=[engine.interpret(r) for r in body.records])
