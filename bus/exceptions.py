"""Transport-level errors."""

from .command import Command


class BusError(Exception):
    """Base class for bus and transport failures."""

    pass


class CommandTimeoutError(BusError):
    """Raised when no correlated reply arrives within the command's ttl."""

    def __init__(self, command: Command) -> None:
        super().__init__(
            f"No reply to {command.type} (correlation_id={command.correlation_id}) "
            f"within {command.ttl} ms"
        )
        self.command = command


class HttpCommandError(BusError):
    """Raised when the platform API answers with an error status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(f"HTTP {status_code}: {message}" if message else f"HTTP {status_code}")
        self.status_code = status_code
        self.message = message
