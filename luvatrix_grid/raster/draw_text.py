from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from luvatrix_grid.raster.canvas import RGBA


DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 10.0
LABEL_FONT_FALLBACKS = ("comicmono", "menlo", "dejavusansmono", "courier")
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_label(
    dst: np.ndarray,
    anchor_x: float,
    anchor_y: float,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int] | None:
    """Paint `text` centred on the anchor and pushed back inside the canvas.

    Returns the top-left pixel the label was painted at, or `None` for empty text.
    """

    if not text:
        return None
    mask = label_mask(text, font_family, font_size_px)
    h, w = mask.shape
    canvas_h, canvas_w = dst.shape[:2]
    x = int(round(min(max(0.0, anchor_x - w / 2.0), max(0.0, canvas_w - w))))
    y = int(round(min(max(0.0, anchor_y - h / 2.0), max(0.0, canvas_h - h))))
    _composite(dst, x, y, mask, color)
    return (x, y)


@lru_cache(maxsize=256)
def label_mask(text: str, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> np.ndarray:
    """Coverage mask (0-255) of `text`, cropped to its ink box. Read-only; shared between calls."""

    font = _font(font_family, font_size_px)
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


def _composite(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    a_src = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) * (color[3] / (255.0 * 255.0))
    if not a_src.any():
        return
    region = dst[y0:y1, x0:x1].astype(np.float32) / 255.0
    a_dst = region[:, :, 3]
    a_out = a_src + a_dst * (1.0 - a_src)
    rgb_src = np.asarray(color[:3], dtype=np.float32) / 255.0
    rgb = rgb_src * a_src[:, :, None] + region[:, :, :3] * (a_dst * (1.0 - a_src))[:, :, None]
    rgb = np.divide(rgb, a_out[:, :, None], out=np.zeros_like(rgb), where=a_out[:, :, None] > 1e-6)

    dst[y0:y1, x0:x1, :3] = np.clip(rgb * 255.0 + 0.5, 0, 255).astype(np.uint8)
    dst[y0:y1, x0:x1, 3] = np.clip(a_out * 255.0 + 0.5, 0, 255).astype(np.uint8)


@lru_cache(maxsize=64)
def _font(font_family: str, font_size_px: float) -> Font:
    path = _font_path(font_family.strip().lower() or DEFAULT_FONT_FAMILY.lower())
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=max(1, int(round(font_size_px))))
        except OSError:
            pass
    return ImageFont.load_default()


@lru_cache(maxsize=16)
def _font_path(wanted: str) -> Path | None:
    installed = [
        path
        for base in FONT_DIRS
        if base.exists()
        for pattern in ("*.ttf", "*.otf", "*.ttc")
        for path in base.rglob(pattern)
    ]
    for needle in (wanted.replace(" ", ""),) + LABEL_FONT_FALLBACKS:
        for path in installed:
            if needle in path.name.lower().replace(" ", ""):
                return path
    return None
