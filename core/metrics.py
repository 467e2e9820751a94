"""Prometheus metrics for bus traffic and scan polling."""
from prometheus_client import Counter, Histogram, generate_latest, REGISTRY


# =============================================================================
# Counters
# =============================================================================

bus_commands_total = Counter(
    "sectester_bus_commands_total",
    "Total number of commands executed through a dispatcher",
    ["type", "status"]  # status: success, empty, timeout, error
)

bus_events_total = Counter(
    "sectester_bus_events_total",
    "Total number of events published",
    ["type"]
)

scan_refresh_total = Counter(
    "sectester_scan_refresh_total",
    "Total number of remote scan status fetches"
)

scan_outcomes_total = Counter(
    "sectester_scan_outcomes_total",
    "Outcomes of scan expectation waits",
    ["outcome"]  # success, too_many_scans, aborted, timed_out
)


# =============================================================================
# Histograms
# =============================================================================

bus_command_duration_seconds = Histogram(
    "sectester_bus_command_duration_seconds",
    "Command round-trip duration in seconds",
    ["type"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30]
)


# =============================================================================
# Metric Helpers
# =============================================================================

def metrics_response() -> bytes:
    """
    Generate Prometheus metrics response.

    Returns:
        Prometheus text format metrics
    """
    return generate_latest(REGISTRY)


def record_command(command_type: str, status: str, duration: float | None = None):
    """
    Record a command round-trip.

    Args:
        command_type: Routing type of the command
        status: Result (success, empty, timeout, error)
        duration: Round-trip duration in seconds, if measured
    """
    bus_commands_total.labels(type=command_type, status=status).inc()
    if duration is not None:
        bus_command_duration_seconds.labels(type=command_type).observe(duration)


def record_event(event_type: str):
    """Record a published event."""
    bus_events_total.labels(type=event_type).inc()


def record_scan_refresh():
    """Record one remote scan status fetch."""
    scan_refresh_total.inc()


def record_scan_outcome(outcome: str):
    """
    Record how an expectation wait concluded.

    Args:
        outcome: success, too_many_scans, aborted or timed_out
    """
    scan_outcomes_total.labels(outcome=outcome).inc()
