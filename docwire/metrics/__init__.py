from .registry import (
    OPERATION_LATENCY_SECONDS,
    OPERATION_TOTAL,
    UNSUPPORTED_FEATURE_TOTAL,
)

__all__ = [
    "OPERATION_TOTAL",
    "OPERATION_LATENCY_SECONDS",
    "UNSUPPORTED_FEATURE_TOTAL",
]
