"""Exception types and global exception handling for the application."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence

if TYPE_CHECKING:
    from fsm_interpreter.state_machine.validation import Diagnostic

logger = logging.getLogger("app.exceptions")


class FsmInterpreterError(Exception):
    """Base class for errors raised outside the evaluation core."""


class DefinitionError(FsmInterpreterError, ValueError):
    """A machine definition failed its consistency checks."""

    def __init__(self, message: str, diagnostics: Sequence["Diagnostic"] = ()) -> None:
        super().__init__(message)
        self.diagnostics = tuple(diagnostics)


class TableFrozenError(FsmInterpreterError, RuntimeError):
    """A transition was defined on a table that has been frozen."""


def install_exception_hook() -> None:
    """Log uncaught exceptions before handing them to the previous hook."""

    hook = _ExceptionHook()
    hook.install()


@dataclass
class _ExceptionHook:
    _original_excepthook: Optional[Callable] = None

    def install(self) -> None:
        self._original_excepthook = sys.excepthook
        sys.excepthook = self._handle_exception

    def _handle_exception(self, exc_type, exc_value, exc_traceback) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            if self._original_excepthook:
                self._original_excepthook(exc_type, exc_value, exc_traceback)
            return
        logger.critical(
            "Unhandled exception: %s",
            exc_value,
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        if self._original_excepthook:
            self._original_excepthook(exc_type, exc_value, exc_traceback)
