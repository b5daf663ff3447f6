from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from luvatrix_legend.aes import standardise_aes_mapping, standardise_aes_names
from luvatrix_legend.glyphs import PATH_KEY, POINT_KEY, RECT_KEY, KeyGlyph


@dataclass(frozen=True)
class Geom:
    """A mark type: the aesthetics it understands and the glyph it draws in keys."""

    name: str
    required_aes: tuple[str, ...]
    default_aes: Mapping[str, Any]
    glyph: KeyGlyph

    def __post_init__(self) -> None:
        object.__setattr__(self, "required_aes", standardise_aes_names(self.required_aes))
        object.__setattr__(self, "default_aes", standardise_aes_mapping(self.default_aes))

    @property
    def aes_names(self) -> tuple[str, ...]:
        return self.required_aes + tuple(name for name in self.default_aes if name not in self.required_aes)


@dataclass(frozen=True)
class Layer:
    """The parts of a plot layer that decide its legend contribution.

    `show_legend` is tri-state: None follows the aesthetic overlap with the
    key, True opts in, False opts out.
    """

    geom: Geom
    mapping: Mapping[str, Any] = field(default_factory=dict)
    stat_default_aes: Mapping[str, Any] = field(default_factory=dict)
    geom_params: Mapping[str, Any] = field(default_factory=dict)
    stat_params: Mapping[str, Any] = field(default_factory=dict)
    show_legend: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", standardise_aes_mapping(self.mapping))
        object.__setattr__(self, "stat_default_aes", standardise_aes_mapping(self.stat_default_aes))
        object.__setattr__(self, "geom_params", standardise_aes_mapping(self.geom_params))

    @property
    def fixed_aes(self) -> dict[str, Any]:
        """Aesthetics set to constants when the layer was built."""

        names = set(self.geom.aes_names)
        return {name: value for name, value in self.geom_params.items() if name in names}

    @property
    def params(self) -> dict[str, Any]:
        return {**self.geom_params, **self.stat_params}

    def resolve_defaults(self, rows: Sequence[Mapping[str, Any]] | None) -> list[dict[str, Any]]:
        """Fill geom defaults under each row, then apply the layer's fixed aesthetics.

        With `rows` of None a single all-defaults row is returned.
        """

        fixed = self.fixed_aes
        source: Sequence[Mapping[str, Any]] = [{}] if rows is None else rows
        out: list[dict[str, Any]] = []
        for row in source:
            resolved = dict(self.geom.default_aes)
            resolved.update(row)
            resolved.update(fixed)
            out.append(resolved)
        return out


GEOM_POINT = Geom(
    name="point",
    required_aes=("x", "y"),
    default_aes={"shape": 19, "colour": "black", "size": 2.0, "fill": None, "alpha": None, "stroke": 0.5},
    glyph=POINT_KEY,
)
GEOM_PATH = Geom(
    name="path",
    required_aes=("x", "y"),
    default_aes={"colour": "black", "linewidth": 0.5, "linetype": 1, "alpha": None},
    glyph=PATH_KEY,
)
GEOM_LINE = Geom(name="line", required_aes=GEOM_PATH.required_aes, default_aes=GEOM_PATH.default_aes, glyph=PATH_KEY)
GEOM_TILE = Geom(
    name="tile",
    required_aes=("x", "y"),
    default_aes={"fill": "grey50", "colour": None, "linewidth": 0.1, "linetype": 1, "alpha": None},
    glyph=RECT_KEY,
)
GEOM_BAR = Geom(
    name="bar",
    required_aes=("x", "y"),
    default_aes={"fill": "grey35", "colour": None, "linewidth": 0.5, "linetype": 1, "alpha": None},
    glyph=RECT_KEY,
)

GEOMS: dict[str, Geom] = {geom.name: geom for geom in (GEOM_POINT, GEOM_PATH, GEOM_LINE, GEOM_TILE, GEOM_BAR)}
