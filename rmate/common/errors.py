"""Error taxonomy for the rmate bootstrap"""


class RmateError(Exception):
    """Base class for errors that end an rmate invocation"""


class UsageError(RmateError):
    """Command line could not be used: malformed flags or no file argument"""


class ConfigError(RmateError, ValueError):
    """A configuration value is invalid or could not be resolved"""


class TransportError(RmateError, ConnectionError):
    """TCP connection to the rmate server could not be established"""

    def __init__(self, host: str, port: int, reason: object) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"Failed to connect to {host}:{port}: {reason}")
