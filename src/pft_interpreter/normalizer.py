"""Input normalizer — turns raw field values into ``float`` or ``None``.

The input-collection surface hands over whatever the user typed.  Partial
test panels are the norm, so parsing is permissive: anything that is not a
finite number becomes ``None`` ("not provided") instead of raising.  A
``None`` is never treated as zero; every classifier step that needs it is
skipped.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

logger = logging.getLogger(__name__)


def parse_measurement(value: Any) -> float | None:
    """Convert one raw field value to a finite float, or ``None`` if absent.

    Accepts numbers and numeric strings (surrounding whitespace allowed).
    Blank strings, unparseable text, booleans, NaN and infinities all
    normalize to ``None``.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            logger.debug("Dropping unparseable measurement %r", value)
            return None
    else:
        logger.debug("Dropping measurement of unsupported type %s", type(value).__name__)
        return None

    if not math.isfinite(number):
        logger.debug("Dropping non-finite measurement %r", value)
        return None
    return number


def percent_change(current: float | None, reference: float | None) -> float | None:
    """Return ``(current - reference) / reference * 100``.

    ``None`` when either value is absent, the reference is zero, or the
    change overflows to infinity.
    """
    if current is None or reference is None or reference == 0:
        return None
    change = (current - reference) / reference * 100
    if not math.isfinite(change):
        return None
    return change


def in_range(value: float | None, bounds: tuple[float, float]) -> bool:
    """Inclusive range check; an absent value is never in range."""
    if value is None:
        return False
    lo, hi = bounds
    return lo <= value <= hi


def format_fixed(value: float, digits: int) -> str:
    """Format *value* with *digits* decimals, rounding halves away from zero.

    Rounds the exact binary value of the float, so ``64.5`` renders as
    ``"65"`` and ``1.005`` (stored as 1.00499...) as ``"1.00"``.
    """
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # quantize fails once the result needs more digits than the context holds
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:.{digits}f}"
