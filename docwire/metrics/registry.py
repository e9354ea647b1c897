from prometheus_client import Counter, Histogram

OPERATION_TOTAL = Counter(
    "docwire_operation_total",
    "Completed operations by outcome",
    ["operation", "status"],
)

OPERATION_LATENCY_SECONDS = Histogram(
    "docwire_operation_latency_seconds",
    "Time from execute() to completion",
    ["operation"],
)

UNSUPPORTED_FEATURE_TOTAL = Counter(
    "docwire_unsupported_feature_total",
    "Operations refused before dispatch because a feature was not supported",
    ["operation", "feature"],
)
