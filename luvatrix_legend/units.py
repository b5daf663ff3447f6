from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from luvatrix_legend.errors import LegendConfigError


MM_PER_INCH = 25.4
MM_PER_UNIT: dict[str, float] = {
    "mm": 1.0,
    "cm": 10.0,
    "in": MM_PER_INCH,
    "pt": MM_PER_INCH / 72.27,
    "bigpts": MM_PER_INCH / 72.0,
}
UNIT_ALIASES = {
    "line": "lines",
    "inch": "in",
    "inches": "in",
    "points": "pt",
    "point": "pt",
    "pixel": "px",
    "pixels": "px",
    "millimetre": "mm",
    "millimeter": "mm",
}


def normalize_unit(unit: str) -> str:
    name = UNIT_ALIASES.get(unit.strip().lower(), unit.strip().lower())
    if name not in MM_PER_UNIT and name not in {"px", "lines"}:
        raise LegendConfigError(f"unknown length unit: {unit!r}")
    return name


@dataclass(frozen=True)
class Length:
    """Length in a named unit; `lines` and `px` are resolved against the theme."""

    value: float
    unit: str = "mm"

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", normalize_unit(self.unit))
        object.__setattr__(self, "value", float(self.value))

    def to_mm(self, *, line_mm: float, dpi: float = 96.0) -> float:
        if self.unit == "lines":
            return self.value * line_mm
        if self.unit == "px":
            if dpi <= 0:
                raise ValueError("dpi must be > 0")
            return self.value * MM_PER_INCH / dpi
        return self.value * MM_PER_UNIT[self.unit]

    def scaled(self, factor: float) -> "Length":
        return Length(self.value * factor, self.unit)


LengthLike = Union[Length, float, int]


def as_length(value: LengthLike | None, default_unit: str = "lines") -> Length | None:
    if value is None:
        return None
    if isinstance(value, Length):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LegendConfigError(f"expected a number or Length, got {type(value)!r}")
    return Length(float(value), default_unit)


def points_to_mm(points: float) -> float:
    return points * MM_PER_UNIT["pt"]

