"""Grid arrangement of legend keys, labels and title.

Layout runs in two stages. `arrange_keys_and_labels` places the N keys and
labels for one of the eight (direction, label position) combinations;
`wrap_title` then adds the title on one of four sides. Each axis of the
grid is an `AxisPlan`: an ordered list of sized segments that is queried
for 1-based grid addresses instead of computing them with index arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from luvatrix_legend.errors import LegendConfigError


KEY = "key"
LABEL = "label"
GAP = "gap"
TITLE = "title"
FILL = "fill"


@dataclass(frozen=True)
class AxisSegment:
    """One row or column. `entry` ties it to a legend row; None means shared by all."""

    roles: tuple[str, ...]
    size: float
    entry: int | None = None

    def serves(self, role: str, entry: int | None) -> bool:
        return role in self.roles and (self.entry is None or self.entry == entry)


@dataclass(frozen=True)
class AxisPlan:
    segments: tuple[AxisSegment, ...] = ()

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def sizes(self) -> np.ndarray:
        return np.asarray([seg.size for seg in self.segments], dtype=np.float64)

    @property
    def total(self) -> float:
        return float(sum(seg.size for seg in self.segments))

    def address(self, role: str, entry: int | None = None) -> int:
        for index, seg in enumerate(self.segments, start=1):
            if seg.serves(role, entry):
                return index
        raise KeyError(f"no {role} segment for entry {entry}")

    def extended(self, before: Iterable[AxisSegment] = (), after: Iterable[AxisSegment] = ()) -> "AxisPlan":
        return AxisPlan(tuple(before) + self.segments + tuple(after))


def shared(role_or_roles: str | tuple[str, ...], size: float) -> AxisSegment:
    roles = (role_or_roles,) if isinstance(role_or_roles, str) else role_or_roles
    return AxisSegment(roles=roles, size=float(size))


def gap(size: float) -> AxisSegment:
    return AxisSegment(roles=(GAP,), size=float(size))


def interleaved(
    first_role: str,
    first_sizes: Sequence[float],
    second_role: str,
    second_sizes: Sequence[float],
    *,
    full_gap: float,
) -> AxisPlan:
    """[first, half gap, second] per entry, full gaps between entries, none trailing."""

    segments: list[AxisSegment] = []
    for i, (a, b) in enumerate(zip(first_sizes, second_sizes)):
        if i:
            segments.append(gap(full_gap))
        segments.append(AxisSegment(roles=(first_role,), size=float(a), entry=i))
        segments.append(gap(full_gap / 2.0))
        segments.append(AxisSegment(roles=(second_role,), size=float(b), entry=i))
    return AxisPlan(tuple(segments))


def per_entry(roles: tuple[str, ...], sizes: Sequence[float]) -> AxisPlan:
    return AxisPlan(tuple(AxisSegment(roles=roles, size=float(s), entry=i) for i, s in enumerate(sizes)))


def _max(values: np.ndarray, *extra: float) -> float:
    return float(max([*values.tolist(), *extra], default=0.0))


@dataclass(frozen=True, eq=False)
class BlockSizes:
    """Measured inputs to the key+label block, all in mm."""

    key_width: float
    key_height: float
    key_sizes: np.ndarray
    label_widths: np.ndarray
    label_heights: np.ndarray

    @classmethod
    def of(
        cls,
        *,
        key_width: float,
        key_height: float,
        label_widths: Sequence[float],
        label_heights: Sequence[float],
        key_sizes: Sequence[float] | None = None,
    ) -> "BlockSizes":
        n = len(label_widths)
        if len(label_heights) != n:
            raise ValueError("label widths and heights must have the same length")
        sizes = np.zeros(n) if key_sizes is None else np.asarray(key_sizes, dtype=np.float64)
        if sizes.size != n:
            raise ValueError("key sizes must have one entry per legend row")
        return cls(
            key_width=float(key_width),
            key_height=float(key_height),
            key_sizes=sizes,
            label_widths=np.asarray(label_widths, dtype=np.float64),
            label_heights=np.asarray(label_heights, dtype=np.float64),
        )

    @property
    def n(self) -> int:
        return int(self.label_widths.size)


@dataclass(frozen=True)
class BlockLayout:
    columns: AxisPlan
    rows: AxisPlan

    def key_cell(self, entry: int) -> tuple[int, int]:
        return (self.rows.address(KEY, entry), self.columns.address(KEY, entry))

    def label_cell(self, entry: int) -> tuple[int, int]:
        return (self.rows.address(LABEL, entry), self.columns.address(LABEL, entry))

    @property
    def widths(self) -> np.ndarray:
        return self.columns.sizes

    @property
    def heights(self) -> np.ndarray:
        return self.rows.sizes


@dataclass(frozen=True)
class GuideLayout(BlockLayout):
    title_position: str = "top"

    def title_span(self) -> tuple[int, int, int, int]:
        """(top, left, bottom, right) grid span of the title, 1-based inclusive."""

        if self.title_position in {"top", "bottom"}:
            row = self.rows.address(TITLE)
            return (row, 1, row, len(self.columns))
        col = self.columns.address(TITLE)
        return (1, col, len(self.rows), col)


def arrange_keys_and_labels(direction: str, label_position: str, sizes: BlockSizes, full_gap: float) -> BlockLayout:
    """Lay out keys and labels; keys repeat along `direction`."""

    n = sizes.n
    if direction == "horizontal":
        key_widths = np.maximum(sizes.key_width, sizes.key_sizes)
        key_height = _max(sizes.key_sizes, sizes.key_height)
        if label_position in {"top", "bottom"}:
            columns = per_entry((KEY, LABEL), np.maximum(sizes.label_widths, key_widths))
            label_row = shared(LABEL, _max(sizes.label_heights))
            key_row = shared(KEY, key_height)
            ordered = (label_row, gap(full_gap), key_row) if label_position == "top" else (key_row, gap(full_gap), label_row)
            return BlockLayout(columns=columns, rows=AxisPlan(ordered))
        if label_position == "left":
            columns = interleaved(LABEL, sizes.label_widths, KEY, key_widths, full_gap=full_gap)
        elif label_position == "right":
            columns = interleaved(KEY, key_widths, LABEL, sizes.label_widths, full_gap=full_gap)
        else:
            raise LegendConfigError(f'label position "{label_position}" is invalid')
        rows = AxisPlan((shared((KEY, LABEL), _max(sizes.label_heights, key_height)),))
        return BlockLayout(columns=columns, rows=rows)

    if direction == "vertical":
        key_width = _max(sizes.key_sizes, sizes.key_width)
        key_heights = np.maximum(sizes.key_height, sizes.key_sizes)
        if label_position in {"left", "right"}:
            rows = per_entry((KEY, LABEL), np.maximum(key_heights, sizes.label_heights))
            label_col = shared(LABEL, _max(sizes.label_widths))
            key_col = shared(KEY, key_width)
            ordered = (label_col, gap(full_gap), key_col) if label_position == "left" else (key_col, gap(full_gap), label_col)
            return BlockLayout(columns=AxisPlan(ordered), rows=rows)
        if label_position == "top":
            rows = interleaved(LABEL, sizes.label_heights, KEY, key_heights, full_gap=full_gap)
        elif label_position == "bottom":
            rows = interleaved(KEY, key_heights, LABEL, sizes.label_heights, full_gap=full_gap)
        else:
            raise LegendConfigError(f'label position "{label_position}" is invalid')
        columns = AxisPlan((shared((KEY, LABEL), _max(sizes.label_widths, key_width)),))
        return BlockLayout(columns=columns, rows=rows)

    raise LegendConfigError(f'direction "{direction}" is invalid')


def wrap_title(
    title_position: str,
    block: BlockLayout,
    title_width: float,
    title_height: float,
    full_gap: float,
) -> GuideLayout:
    """Add the title beside the block; the block itself is never resized.

    A title longer than the block grows the grid through a trailing FILL
    segment on the axis the title spans.
    """

    if title_position in {"top", "bottom"}:
        columns = block.columns.extended(after=(shared(FILL, max(0.0, title_width - block.columns.total)),))
        title = (shared(TITLE, title_height),)
        if title_position == "top":
            rows = block.rows.extended(before=title + (gap(full_gap),))
        else:
            rows = block.rows.extended(after=(gap(full_gap),) + title)
        return GuideLayout(columns=columns, rows=rows, title_position=title_position)

    if title_position in {"left", "right"}:
        rows = block.rows.extended(after=(shared(FILL, max(0.0, title_height - block.rows.total)),))
        title = (shared(TITLE, title_width),)
        if title_position == "left":
            columns = block.columns.extended(before=title + (gap(full_gap),))
        else:
            columns = block.columns.extended(after=(gap(full_gap),) + title)
        return GuideLayout(columns=columns, rows=rows, title_position=title_position)

    raise LegendConfigError(f'title position "{title_position}" is invalid')
