"""Prometheus metrics for Receipts.

Tracks operation outcomes, ledger round-trip latency and audit log size.
"""

from prometheus_client import Counter, Gauge, Histogram

OPERATIONS = Counter(
    "receipts_operations_total",
    "Total number of receipt operations handled",
    labelnames=["operation", "outcome"],
)

LEDGER_LATENCY = Histogram(
    "receipts_ledger_latency_seconds",
    "Ledger call latency in seconds",
    labelnames=["operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

AUDIT_LOG_RECORDS = Gauge(
    "receipts_audit_log_records",
    "Number of records in the serving app's audit log",
)


def record_operation(operation: str, outcome: str) -> None:
    """Count one handled operation.

    Args:
        operation: Operation name (mint_receipt, transfer_receipt, ...)
        outcome: "success", "rejected" or "failed"
    """
    OPERATIONS.labels(operation=operation, outcome=outcome).inc()
