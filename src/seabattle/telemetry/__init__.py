"""Public telemetry helpers for seabattle."""

from __future__ import annotations

from .config import TelemetryConfig, init_telemetry, load_telemetry_config
from .logger import configure_logging, init_logging
from .metrics import get_meter, init_metrics, record_distribution, record_game_metric
from .tracer import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "TelemetryConfig",
    "configure_logging",
    "get_tracer",
    "get_meter",
    "record_game_metric",
    "record_distribution",
    "init_logging",
    "init_tracing",
    "init_metrics",
    "load_telemetry_config",
    "init_telemetry",
    "shutdown_tracing",
]
