from __future__ import annotations

import dataclasses
import logging
from typing import Any, Sequence

from luvatrix_legend.aes import LABEL_COLUMN
from luvatrix_legend.key_table import KeyEntry, KeyTable
from luvatrix_legend.spec import GuideSpec


LOGGER = logging.getLogger(__name__)


def join_key_tables(left: KeyTable, right: KeyTable) -> KeyTable:
    """Inner join on every shared column, in `left` row order.

    Rows of either table without a partner in the other are dropped.
    """

    shared = [col for col in left.columns if col in right.columns]
    extra = tuple(aes for aes in right.aesthetics if aes not in left.aesthetics)

    def identity(entry: KeyEntry) -> tuple[Any, ...]:
        return tuple(entry.label if col == LABEL_COLUMN else entry.values[col] for col in shared)

    entries: list[KeyEntry] = []
    for a in left.entries:
        ident = identity(a)
        for b in right.entries:
            if identity(b) != ident:
                continue
            values = dict(a.values)
            values.update({aes: b.values[aes] for aes in extra})
            overrides = {**b.overrides, **a.overrides}
            entries.append(KeyEntry(label=a.label, values=values, overrides=overrides))
    return KeyTable(entries=tuple(entries), aesthetics=left.aesthetics + extra)


def merge_guide_pair(guide: GuideSpec, new_guide: GuideSpec) -> GuideSpec:
    if guide.key is None or new_guide.key is None:
        raise ValueError("only trained guides can be merged")
    key = join_key_tables(guide.key, new_guide.key)

    set_aes = dict(guide.set_aes)
    duplicated = [name for name in new_guide.set_aes if name in set_aes]
    for name, value in new_guide.set_aes.items():
        set_aes.setdefault(name, value)
    if duplicated:
        LOGGER.warning("Duplicated set_aes is ignored: %s", ", ".join(duplicated))

    return dataclasses.replace(guide, key=key, set_aes=set_aes)


def merge_guides(guides: Sequence[GuideSpec]) -> list[GuideSpec]:
    """Fold guides that share a hash into one, keeping first-appearance order."""

    groups: dict[str, list[GuideSpec]] = {}
    for guide in guides:
        if guide.hash is None:
            raise ValueError("only trained guides can be merged")
        groups.setdefault(guide.hash, []).append(guide)

    merged: list[GuideSpec] = []
    for members in groups.values():
        head = members[0]
        for other in members[1:]:
            head = merge_guide_pair(head, other)
        merged.append(head)
    return merged
