"""Test-facing layer package."""

from .fakes_context import FakesContext

__all__ = ["FakesContext"]
