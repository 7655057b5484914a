"""Price calculation."""

from __future__ import annotations

from .calculator import compute_amount

__all__ = ["compute_amount"]
