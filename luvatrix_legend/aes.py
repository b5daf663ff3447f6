from __future__ import annotations

from typing import Any, Iterable, Mapping


AES_ALIASES = {"color": "colour", "pch": "shape", "cex": "size", "lwd": "linewidth", "lty": "linetype", "bg": "fill"}
LABEL_COLUMN = ".label"


def standardise_aes_name(name: str) -> str:
    return AES_ALIASES.get(name, name)


def standardise_aes_names(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(standardise_aes_name(name) for name in names)


def standardise_aes_mapping(mapping: Mapping[str, Any] | None) -> dict[str, Any]:
    if not mapping:
        return {}
    return {standardise_aes_name(key): value for key, value in mapping.items()}
