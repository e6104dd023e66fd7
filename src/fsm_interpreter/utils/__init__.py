"""Utility helpers."""

from .names import NameRegistry

__all__ = ["NameRegistry"]
