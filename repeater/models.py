"""Repeater type definitions."""

from enum import Enum


class RepeaterStatus(Enum):
    """Status reported to the platform in heartbeat events."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class RunningStatus(Enum):
    """Local lifecycle of a Repeater instance."""

    OFF = "off"
    STARTING = "starting"
    RUNNING = "running"


# Valid lifecycle transitions
VALID_TRANSITIONS: dict[RunningStatus, set[RunningStatus]] = {
    RunningStatus.OFF: {RunningStatus.STARTING},
    RunningStatus.STARTING: {RunningStatus.RUNNING, RunningStatus.OFF},
    RunningStatus.RUNNING: {RunningStatus.OFF},
}
