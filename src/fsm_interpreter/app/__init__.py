"""Console front end for the interpreter."""

from .driver import SEPARATOR, ConsoleDriver, UnknownEventName, format_table

__all__ = ["SEPARATOR", "ConsoleDriver", "UnknownEventName", "format_table"]
