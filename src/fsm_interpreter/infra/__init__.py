"""Infrastructure helpers: logging setup and exception types."""

from .exceptions import (
    DefinitionError,
    FsmInterpreterError,
    TableFrozenError,
    install_exception_hook,
)
from .logging import configure_logging

__all__ = [
    "DefinitionError",
    "FsmInterpreterError",
    "TableFrozenError",
    "configure_logging",
    "install_exception_hook",
]
