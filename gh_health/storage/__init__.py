"""Local JSON output for collection runs."""

from .manager import OutputManager

__all__ = ["OutputManager"]
