from ..metrics.registry import (
    OPERATION_LATENCY_SECONDS,
    OPERATION_TOTAL,
    UNSUPPORTED_FEATURE_TOTAL,
)


def observe_operation(operation: str, status: str, latency_s: float) -> None:
    OPERATION_TOTAL.labels(operation=operation, status=status).inc()
    OPERATION_LATENCY_SECONDS.labels(operation=operation).observe(latency_s)


def observe_unsupported_feature(operation: str, feature: str) -> None:
    UNSUPPORTED_FEATURE_TOTAL.labels(operation=operation, feature=feature).inc()
