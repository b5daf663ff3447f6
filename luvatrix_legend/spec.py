from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

from luvatrix_legend.aes import standardise_aes_mapping
from luvatrix_legend.errors import LegendConfigError
from luvatrix_legend.resolve import WAIVER, first_of
from luvatrix_legend.units import Length, LengthLike, as_length, normalize_unit

if TYPE_CHECKING:
    from luvatrix_legend.key_table import KeyTable
    from luvatrix_legend.marks import MarkContribution


POSITIONS: tuple[str, ...] = ("top", "bottom", "left", "right")
DIRECTIONS: tuple[str, ...] = ("horizontal", "vertical")


@dataclass(frozen=True)
class GuideSpec:
    """User-settable legend options plus the state filled in while training.

    Options left as None are resolved against the theme when the legend is
    built, so a spec created before a theme change still follows the theme.
    Position and direction values are validated at build time, not here.
    """

    title: Any = WAIVER
    title_position: str | None = None
    title_angle: float | None = None
    title_hjust: float | None = None
    title_vjust: float | None = None
    title_theme: Mapping[str, Any] | None = None

    label: bool = True
    label_position: str | None = None
    label_angle: float | None = None
    label_hjust: float | None = None
    label_vjust: float | None = None
    label_theme: Mapping[str, Any] | None = None

    key_width: Length | None = None
    key_height: Length | None = None

    direction: str | None = None
    default_unit: str = "lines"
    set_aes: Mapping[str, Any] = field(default_factory=dict)
    name: str = "legend"
    available_aes: tuple[str, ...] = ("any",)

    key: "KeyTable | None" = None
    hash: str | None = None
    marks: "tuple[MarkContribution, ...]" = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_unit", normalize_unit(self.default_unit))
        object.__setattr__(self, "key_width", as_length(self.key_width, self.default_unit))
        object.__setattr__(self, "key_height", as_length(self.key_height, self.default_unit))
        object.__setattr__(self, "set_aes", standardise_aes_mapping(self.set_aes))
        object.__setattr__(self, "available_aes", tuple(self.available_aes))

    @property
    def is_trained(self) -> bool:
        return self.key is not None and self.hash is not None

    def resolved_direction(self, default: str) -> str:
        return first_of(self.direction, default=default)

    def resolved_title_position(self, direction: str) -> str:
        return first_of(self.title_position, default="top" if direction == "vertical" else "left")

    def resolved_label_position(self) -> str:
        return first_of(self.label_position, default="right")


def legend_guide(
    title: Any = WAIVER,
    *,
    title_position: str | None = None,
    title_angle: float | None = None,
    title_hjust: float | None = None,
    title_vjust: float | None = None,
    title_theme: Mapping[str, Any] | None = None,
    label: bool = True,
    label_position: str | None = None,
    label_angle: float | None = None,
    label_hjust: float | None = None,
    label_vjust: float | None = None,
    label_theme: Mapping[str, Any] | None = None,
    key_width: LengthLike | None = None,
    key_height: LengthLike | None = None,
    direction: str | None = None,
    default_unit: str = "lines",
    set_aes: Mapping[str, Any] | None = None,
) -> GuideSpec:
    """Keyword constructor; bare numbers for key sizes are read in `default_unit`."""

    return GuideSpec(
        title=title,
        title_position=title_position,
        title_angle=title_angle,
        title_hjust=title_hjust,
        title_vjust=title_vjust,
        title_theme=dict(title_theme) if title_theme else None,
        label=bool(label),
        label_position=label_position,
        label_angle=label_angle,
        label_hjust=label_hjust,
        label_vjust=label_vjust,
        label_theme=dict(label_theme) if label_theme else None,
        key_width=key_width,
        key_height=key_height,
        direction=direction,
        default_unit=default_unit,
        set_aes=dict(set_aes or {}),
    )


def validate_layout_options(direction: str, label_position: str, title_position: str) -> None:
    if direction not in DIRECTIONS:
        raise LegendConfigError(f'direction "{direction}" is invalid')
    if label_position not in POSITIONS:
        raise LegendConfigError(f'label position "{label_position}" is invalid')
    if title_position not in POSITIONS:
        raise LegendConfigError(f'title position "{title_position}" is invalid')
