from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import time

CREATED = "created"
UPDATED = "updated"
FAILED = "failed"

VALID_STATUSES = {CREATED, UPDATED, FAILED}


def _timestamp() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


@dataclass
class ImportOutcome:
    """
    Result of importing one source row.

    Failures are data here, not exceptions: a failed row carries the error
    text and the raw row so the batch can go on.
    """

    row_number: int
    status: str
    email: Optional[str] = None
    customer_id: Optional[int] = None
    order_id: Optional[int] = None
    error: Optional[str] = None
    row: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.status not in VALID_STATUSES:
            raise ValueError(f"Unknown import status '{self.status}'")

    @property
    def ok(self) -> bool:
        return self.status != FAILED

    @property
    def order_missing(self) -> bool:
        return self.status == CREATED and self.order_id is None


@dataclass
class ImportReport:
    """Running totals for one import run."""

    rows: int = 0
    created: int = 0
    updated: int = 0
    failed: int = 0
    orders_missing: int = 0
    started: str = field(default_factory=_timestamp)
    finished: Optional[str] = None

    def add(self, outcome: ImportOutcome) -> None:
        self.rows += 1
        if outcome.status == CREATED:
            self.created += 1
            if outcome.order_missing:
                self.orders_missing += 1
        elif outcome.status == UPDATED:
            self.updated += 1
        else:
            self.failed += 1

    def finish(self) -> None:
        self.finished = _timestamp()

    def summary(self) -> str:
        return (
            f"{self.rows} row(s): {self.created} created, {self.updated} updated, "
            f"{self.failed} failed, {self.orders_missing} fake order(s) missing"
        )
