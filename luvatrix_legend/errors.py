from __future__ import annotations


class LegendError(Exception):
    """Base error for legend guide construction."""


class LegendConfigError(LegendError, ValueError):
    """Invalid enumerated guide option (position, direction, guide name, unit)."""
