"""
Configuration models and data structures.

These settings belong to the command-line layer; the reconciliation core
only ever receives the plain values taken from them.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MachineConfig:
    """Remote docker-machine host access."""
    binary: str = "docker-machine"
    management_port: int = 2376
    ssh_verbose: bool = True
    include_stopped: bool = True


@dataclass
class ReconcilerConfig:
    """Reconciliation loop settings."""
    poll_interval: float = 0.1
    shutdown_timeout: float = 5.0


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_directory: str = "logs"
    max_file_size: str = "10 MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    name: str = "portsync"
    version: str = "0.1.0"
    debug: bool = False

    machine: MachineConfig = field(default_factory=MachineConfig)
    reconciler: ReconcilerConfig = field(default_factory=ReconcilerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If a value is out of range
        """
        if not (1 <= self.machine.management_port <= 65535):
            raise ValueError(
                f"Management port must be between 1 and 65535, got {self.machine.management_port}")

        if not self.machine.binary:
            raise ValueError("Machine binary must not be empty")

        if self.reconciler.poll_interval < 0:
            raise ValueError(
                f"Poll interval must not be negative, got {self.reconciler.poll_interval}")

        if self.reconciler.shutdown_timeout <= 0:
            raise ValueError(
                f"Shutdown timeout must be positive, got {self.reconciler.shutdown_timeout}")

        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.logging.level}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary."""
        try:
            return cls(
                name=data.get('name', 'portsync'),
                version=data.get('version', '0.1.0'),
                debug=data.get('debug', False),
                machine=MachineConfig(**(data.get('machine') or {})),
                reconciler=ReconcilerConfig(**(data.get('reconciler') or {})),
                logging=LoggingConfig(**(data.get('logging') or {})),
                config_file_path=data.get('config_file_path')
            )
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e
