"""Dataclass definitions for application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Mapping, Optional

if TYPE_CHECKING:
    from fsm_interpreter.state_machine.model import MachineDefinition


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration.

    ``filepath=None`` disables the log file. ``loggers`` sets levels for
    single loggers, e.g. ``{"fsm.engine": "DEBUG"}`` to trace every outcome.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filepath: Optional[Path] = Path("logs/fsm_interpreter.log")
    max_bytes: int = 1024 * 1024
    backup_count: int = 3
    console: bool = True
    loggers: Mapping[str, str] = field(default_factory=dict)

    def resolved_path(self) -> Optional[Path]:
        if self.filepath is None:
            return None
        return Path(self.filepath).expanduser().resolve()


@dataclass(frozen=True)
class Config:
    """Root configuration object."""

    machine: MachineDefinition
    logging: LoggingConfig = field(default_factory=LoggingConfig)
