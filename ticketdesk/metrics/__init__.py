# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by repositories and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "ticketdesk_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "ticketdesk_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "ticketdesk_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by the repository layer only) ──
ENTITY_OPERATIONS = Counter(
    "ticketdesk_entity_operations_total",
    "Entity operations by collection, operation and outcome",
    ["collection", "operation", "outcome"],
)
VALIDATION_VIOLATIONS = Counter(
    "ticketdesk_validation_violations_total",
    "Field-level violations reported to callers",
    ["collection", "field"],
)
STORAGE_FAILURES = Counter(
    "ticketdesk_storage_failures_total",
    "Failed reads or writes of the data file",
    ["operation"],
)
ENTITIES_STORED = Gauge(
    "ticketdesk_entities_stored",
    "Number of entities in each collection after the last write",
    ["collection"],
)
