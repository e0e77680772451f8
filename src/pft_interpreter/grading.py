"""GradingStore — loads severity grading tables from YAML into typed models.

The store is loaded once (engine construction or server startup) and is
read-only afterwards, so a single instance can be shared across threads.

Usage::

    store = GradingStore()          # defaults to rules/ inside this package
    store.load()                    # parse grading.yaml

    store.get("obstruction_fev1").grade(65.0)   # -> "Moderate"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)

DEFAULT_RULES_DIR = Path(__file__).resolve().parent / "rules"
GRADING_FILE = "grading.yaml"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class GradeBand(BaseModel):
    """One row of a grading table.

    ``op``/``value`` describe the condition the measured value must meet;
    a band with neither is a catch-all.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    op: Optional[Literal["gt", "ge", "lt", "le"]] = None
    value: Optional[float] = None

    @model_validator(mode="after")
    def _op_and_value_together(self) -> "GradeBand":
        if (self.op is None) != (self.value is None):
            raise ValueError(f"band {self.label!r}: op and value must be set together")
        return self

    @property
    def is_catch_all(self) -> bool:
        return self.op is None

    def matches(self, measured: float) -> bool:
        if self.op is None:
            return True
        if self.op == "gt":
            return measured > self.value
        if self.op == "ge":
            return measured >= self.value
        if self.op == "lt":
            return measured < self.value
        return measured <= self.value


class GradingTable(BaseModel):
    """Ordered severity bands for one measure; first matching band wins."""

    model_config = ConfigDict(frozen=True)

    name: str
    measure: str
    description: str = ""
    bands: List[GradeBand]

    @model_validator(mode="after")
    def _ends_with_catch_all(self) -> "GradingTable":
        if not self.bands:
            raise ValueError(f"grading table {self.name!r} has no bands")
        if not self.bands[-1].is_catch_all:
            raise ValueError(f"grading table {self.name!r} must end with a catch-all band")
        if any(b.is_catch_all for b in self.bands[:-1]):
            raise ValueError(f"grading table {self.name!r} has a catch-all band before the last one")
        return self

    def grade(self, measured: float | None) -> str | None:
        """Return the label of the first band matching *measured*.

        ``None`` when the measured value is not provided.
        """
        if measured is None:
            return None
        for band in self.bands:
            if band.matches(measured):
                return band.label
        # unreachable: the last band is a catch-all
        return self.bands[-1].label


# ---------------------------------------------------------------------------
# GradingStore
# ---------------------------------------------------------------------------

class GradingStore:
    """Loads ``grading.yaml`` and provides lookup by table name.

    Attributes populated after :meth:`load`:

        tables — dict[name, GradingTable], in file order
    """

    def __init__(self, rules_dir: str | Path | None = None) -> None:
        self._base = Path(rules_dir) if rules_dir is not None else DEFAULT_RULES_DIR
        self.tables: dict[str, GradingTable] = {}

    def load(self) -> "GradingStore":
        """Parse the grading YAML into typed tables.

        Raises ``FileNotFoundError`` if the file is missing and
        ``ValueError`` for a duplicated table name; malformed tables raise
        pydantic's ``ValidationError``.
        """
        raw_tables = load_yaml(self._base / GRADING_FILE) or []
        tables: dict[str, GradingTable] = {}
        for raw in raw_tables:
            table = GradingTable(**raw)
            if table.name in tables:
                raise ValueError(f"Duplicate grading table: {table.name}")
            tables[table.name] = table
        self.tables = tables
        logger.info("GradingStore loaded %d tables from %s", len(tables), self._base)
        return self

    def get(self, name: str) -> GradingTable:
        """Return the named table; ``KeyError`` if it does not exist."""
        try:
            return self.tables[name]
        except KeyError:
            raise KeyError(f"Unknown grading table: {name}") from None

    def grade(self, name: str, measured: float | None) -> str | None:
        """Shorthand for ``store.get(name).grade(measured)``."""
        return self.get(name).grade(measured)

    @property
    def names(self) -> list[str]:
        return list(self.tables)
