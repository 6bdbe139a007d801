"""In-process audit log."""

import threading
from typing import NamedTuple

from receipts.audit.models import AuditRecord


class AuditLogSnapshot(NamedTuple):
    """Point-in-time copy of the audit log."""

    records: tuple[AuditRecord, ...]
    count: int


class AuditLog:
    """Ordered, append-only journal of audit records.

    Lives for the lifetime of the process; nothing is persisted. Records are
    frozen and are never removed, so the log only grows. Append order is the
    order in which operations completed.

    A lock makes each append and each snapshot indivisible, so a snapshot
    never observes a partially applied append.
    """

    def __init__(self) -> None:
        self._records: list[AuditRecord] = []
        self._lock = threading.Lock()

    def append(self, record: AuditRecord) -> AuditRecord:
        """Add a record to the end of the log."""
        with self._lock:
            self._records.append(record)
        return record

    def snapshot(self) -> AuditLogSnapshot:
        """Return a copy of the current records and their count."""
        with self._lock:
            records = tuple(self._records)
        return AuditLogSnapshot(records=records, count=len(records))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
