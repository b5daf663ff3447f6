from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.zeros((max(0, height), max(0, width), 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the inclusive pixel rectangle [x0, x1] x [y0, y1], clipped to `dst`."""

    view = _clip(dst, min(x0, x1), min(y0, y1), max(x0, x1) + 1, max(y0, y1) + 1)
    if view is not None:
        _over(view, color, np.ones(view.shape[:2], dtype=np.float32))


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """One-pixel outline of the inclusive rectangle; no pixel is blended twice."""

    fill_rect(dst, x0, y0, x1, y0, color)
    if y1 != y0:
        fill_rect(dst, x0, y1, x1, y1, color)
    if y1 - y0 > 1:
        fill_rect(dst, x0, y0 + 1, x0, y1 - 1, color)
        if x1 != x0:
            fill_rect(dst, x1, y0 + 1, x1, y1 - 1, color)


def blend_coverage(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    """Blend `color` through an 8-bit coverage mask whose top-left sits at (x, y)."""

    h, w = coverage.shape
    view = _clip(dst, x, y, x + w, y + h)
    if view is None:
        return
    top, left = max(0, y) - y, max(0, x) - x
    cov = coverage[top : top + view.shape[0], left : left + view.shape[1]].astype(np.float32) / 255.0
    _over(view, color, cov)


def blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA) -> None:
    """Blend `color` into every pixel of `dst` where the boolean `mask` is set."""

    _over(dst, color, mask.astype(np.float32))


def _clip(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> np.ndarray | None:
    x0, y0 = max(0, x0), max(0, y0)
    x1, y1 = min(dst.shape[1], x1), min(dst.shape[0], y1)
    if x1 <= x0 or y1 <= y0:
        return None
    return dst[y0:y1, x0:x1]


def _over(view: np.ndarray, color: RGBA, coverage: np.ndarray) -> None:
    # Porter-Duff "over" with the source alpha scaled by per-pixel coverage.
    src_a = (color[3] / 255.0) * coverage
    if not np.any(src_a > 0):
        return
    src_a = src_a[:, :, None]
    dst_a = view[:, :, 3:4].astype(np.float32) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    src_rgb = np.asarray(color[:3], dtype=np.float32)
    num = src_rgb * src_a + view[:, :, :3].astype(np.float32) * dst_a * (1.0 - src_a)
    safe = np.where(out_a > 1e-6, out_a, 1.0)
    touched = src_a[:, :, 0] > 0
    rgb = np.clip(num / safe, 0, 255).astype(np.uint8)
    alpha = np.clip(np.rint(out_a * 255.0), 0, 255).astype(np.uint8)
    view[:, :, :3][touched] = rgb[touched]
    view[:, :, 3:4][touched] = alpha[touched]
