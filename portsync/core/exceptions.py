"""
Error taxonomy for portsync.

Every fault raised inside a reconciliation cycle derives from PortsyncError
so the lifecycle layer can tell expected faults from programming errors.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Error codes"""
    CONFIG_ERROR = 10001
    REMOTE_EXEC_ERROR = 10002
    DECODE_ERROR = 10003
    TUNNEL_START_ERROR = 10004
    TERMINATION_ERROR = 10005


class PortsyncError(Exception):
    """Base exception"""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigError(PortsyncError):
    """Invalid configuration"""

    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorCode.CONFIG_ERROR, message, details)


class RemoteExecError(PortsyncError):
    """A command run against the remote host failed."""

    def __init__(
        self,
        message: str,
        command: Optional[list] = None,
        returncode: Optional[int] = None,
        stderr: str = ""
    ):
        super().__init__(
            ErrorCode.REMOTE_EXEC_ERROR,
            message,
            {'command': command, 'returncode': returncode, 'stderr': stderr}
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class DecodeError(PortsyncError):
    """Inspection payload could not be read as container records."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorCode.DECODE_ERROR, message, details)


class TunnelStartError(PortsyncError):
    """The forwarding process could not be launched."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorCode.TUNNEL_START_ERROR, message, details)


class TerminationError(PortsyncError):
    """The forwarding process could not be killed."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(ErrorCode.TERMINATION_ERROR, message, details)
