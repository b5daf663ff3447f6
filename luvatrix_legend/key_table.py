from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
import hashlib
import json
import logging
from typing import Any, Iterator, Mapping, Sequence

from luvatrix_legend.aes import LABEL_COLUMN, standardise_aes_mapping
from luvatrix_legend.scales import Scale
from luvatrix_legend.spec import GuideSpec


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyEntry:
    """One legend row: mapped aesthetic values, display label, forced overrides."""

    label: str
    values: Mapping[str, Any]
    overrides: Mapping[str, Any] = field(default_factory=dict)

    def as_row(self) -> dict[str, Any]:
        row = dict(self.values)
        row[LABEL_COLUMN] = self.label
        return row


@dataclass(frozen=True)
class KeyTable:
    """Legend rows in scale break order. Never re-sorted."""

    entries: tuple[KeyEntry, ...]
    aesthetics: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[KeyEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> KeyEntry:
        return self.entries[index]

    @property
    def columns(self) -> tuple[str, ...]:
        return self.aesthetics + (LABEL_COLUMN,)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(entry.label for entry in self.entries)

    def column(self, name: str) -> list[Any]:
        if name == LABEL_COLUMN:
            return list(self.labels)
        return [entry.values[name] for entry in self.entries]

    def select(self, names: Sequence[str]) -> list[dict[str, Any]]:
        return [{name: entry.values[name] for name in names} for entry in self.entries]

    def with_override(self, index: int, **aes: Any) -> "KeyTable":
        entry = self.entries[index]
        merged = {**entry.overrides, **standardise_aes_mapping(aes)}
        entries = list(self.entries)
        entries[index] = dataclasses.replace(entry, overrides=merged)
        return dataclasses.replace(self, entries=tuple(entries))


def guide_hash(title: Any, labels: Sequence[str], direction: str | None, name: str) -> str:
    """Identity of a legend: title, labels, direction and guide name only."""

    payload = json.dumps([title, list(labels), direction, name], default=repr, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def build_key_table(scale: Scale) -> KeyTable:
    breaks = list(scale.breaks())
    mapped = list(scale.map(breaks))
    labels = [str(label) for label in scale.labels()]
    if len(mapped) != len(breaks) or len(labels) != len(breaks):
        raise ValueError(
            f"scale returned {len(breaks)} breaks, {len(mapped)} mapped values and {len(labels)} labels"
        )
    aesthetic = scale.aesthetics[0]
    entries = tuple(KeyEntry(label=label, values={aesthetic: value}) for value, label in zip(mapped, labels))
    return KeyTable(entries=entries, aesthetics=(aesthetic,))


def train_guide(guide: GuideSpec, scale: Scale) -> GuideSpec | None:
    """Return a copy of `guide` carrying `key` and `hash`, or None if the scale has no breaks."""

    key = build_key_table(scale)
    if len(key) == 0:
        LOGGER.debug("legend for %s omitted: scale has no breaks", scale.aesthetics[0])
        return None
    digest = guide_hash(guide.title, key.labels, guide.direction, guide.name)
    return dataclasses.replace(guide, key=key, hash=digest)
