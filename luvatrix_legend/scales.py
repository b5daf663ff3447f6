from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Protocol, Sequence

import numpy as np

from luvatrix_legend.aes import standardise_aes_names
from luvatrix_legend.colors import interpolate_hex, is_hex_color
from luvatrix_legend.resolve import WAIVER


class Scale(Protocol):
    """What a legend needs from a data scale."""

    aesthetics: tuple[str, ...]
    name: Any
    guide: Any

    def breaks(self) -> Sequence[Any]:
        ...

    def map(self, values: Sequence[Any]) -> list[Any]:
        ...

    def labels(self) -> list[str]:
        ...


@dataclass
class DiscreteScale:
    aesthetics: tuple[str, ...]
    levels: Sequence[Any]
    palette: Sequence[Any] | Callable[[int], Sequence[Any]]
    name: Any = WAIVER
    label_text: Sequence[str] | None = None
    guide: Any = "legend"

    def __post_init__(self) -> None:
        self.aesthetics = standardise_aes_names(self.aesthetics)
        self.levels = tuple(self.levels)
        if self.label_text is not None and len(self.label_text) != len(self.levels):
            raise ValueError("label_text must have one entry per level")

    def breaks(self) -> list[Any]:
        return list(self.levels)

    def map(self, values: Sequence[Any]) -> list[Any]:
        pal = self.palette(len(self.levels)) if callable(self.palette) else self.palette
        if len(pal) < len(self.levels):
            raise ValueError(f"palette has {len(pal)} values for {len(self.levels)} levels")
        lookup = {level: pal[i] for i, level in enumerate(self.levels)}
        return [lookup.get(v) for v in values]

    def labels(self) -> list[str]:
        if self.label_text is not None:
            return [str(text) for text in self.label_text]
        return [str(level) for level in self.levels]


@dataclass
class ContinuousScale:
    """Linear scale whose legend breaks are "nice" ticks inside `limits`.

    `output_range` is either two numbers (rescaled linearly, e.g. point size)
    or two hex colours (interpolated, e.g. a fill gradient).
    """

    aesthetics: tuple[str, ...]
    limits: tuple[float, float]
    output_range: tuple[Any, Any]
    name: Any = WAIVER
    n_breaks: int = 5
    guide: Any = "legend"
    explicit_breaks: Sequence[float] | None = field(default=None)

    def __post_init__(self) -> None:
        self.aesthetics = standardise_aes_names(self.aesthetics)
        lo, hi = (float(v) for v in self.limits)
        if not np.isfinite(lo) or not np.isfinite(hi) or hi < lo:
            raise ValueError("limits must be finite with low <= high")
        self.limits = (lo, hi)

    def breaks(self) -> list[float]:
        lo, hi = self.limits
        if self.explicit_breaks is not None:
            ticks = np.asarray(list(self.explicit_breaks), dtype=np.float64)
        else:
            ticks = generate_nice_ticks(lo, hi, self.n_breaks)
        eps = max(1e-12, (hi - lo) * 1e-9)
        inside = ticks[(ticks >= lo - eps) & (ticks <= hi + eps)]
        return [float(v) for v in inside]

    def map(self, values: Sequence[Any]) -> list[Any]:
        lo, hi = self.limits
        span = hi - lo
        out: list[Any] = []
        for value in values:
            t = 0.5 if span == 0 else (float(value) - lo) / span
            out.append(self._interpolate(t))
        return out

    def labels(self) -> list[str]:
        return format_ticks(np.asarray(self.breaks(), dtype=np.float64))

    def _interpolate(self, t: float) -> Any:
        low, high = self.output_range
        if is_hex_color(low) and is_hex_color(high):
            return interpolate_hex(low, high, t)
        return float(low) + (float(high) - float(low)) * t


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.ceil(vmin / step) * step
    tick_max = np.floor(vmax / step) * step
    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Snap float drift (e.g. -4.44e-16 -> 0) back onto the step grid.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_ticks(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [_format_tick(float(ticks[0]), step=None)]
    step = float(abs(ticks[1] - ticks[0]))
    return [_format_tick(float(v), step=step) for v in ticks]


def _format_tick(value: float, *, step: float | None) -> str:
    if not np.isfinite(value):
        return str(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    try:
        quantized = Decimal(str(value)).quantize(Decimal("1").scaleb(-decimals))
    except InvalidOperation:
        quantized = Decimal(str(value))
    out = format(quantized, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return "0" if out == "-0" else out


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)
    if round_result:
        cuts = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
        nice_frac = next((nice for cut, nice in cuts if frac < cut), 10.0)
    else:
        cuts = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
        nice_frac = next((nice for cut, nice in cuts if frac <= cut), 10.0)
    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exp = Decimal(str(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exp)))
