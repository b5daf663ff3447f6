from __future__ import annotations

from typing import Any, TypeVar


T = TypeVar("T")


class _Waiver:
    """Marker for "inherit this value from the scale"."""

    _instance: "_Waiver | None" = None

    def __new__(cls) -> "_Waiver":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "WAIVER"

    def __reduce__(self) -> str:
        return "WAIVER"


WAIVER = _Waiver()


def is_waiver(value: Any) -> bool:
    return value is WAIVER


def first_of(*candidates: Any, default: Any = None) -> Any:
    """Return the first candidate that is neither None nor WAIVER.

    Candidates are checked left to right, so callers list the most specific
    option first: guide option, then theme option, then `default`.
    """

    for candidate in candidates:
        if candidate is None or candidate is WAIVER:
            continue
        return candidate
    return default


def first_unwaived(*candidates: Any, default: Any = None) -> Any:
    """Like `first_of`, but `None` is a real answer and stops the chain.

    Used for titles, where `None` means "suppressed" and only WAIVER defers.
    """

    for candidate in candidates:
        if candidate is WAIVER:
            continue
        return candidate
    return default
