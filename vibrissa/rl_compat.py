"""Raylib helpers - struct constructors, text and Pillow-to-texture upload."""

from __future__ import annotations
from typing import Any, Tuple

import raylib as rl
from PIL import Image


def make_rect(x: float, y: float, w: float, h: float) -> Any:
    """Create a raylib Rectangle."""
    r = rl.ffi.new("Rectangle *")
    r[0].x = float(x)
    r[0].y = float(y)
    r[0].width = float(w)
    r[0].height = float(h)
    return r[0]


def make_vec2(x: float, y: float) -> Any:
    """Create a raylib Vector2."""
    v = rl.ffi.new("Vector2 *")
    v[0].x = float(x)
    v[0].y = float(y)
    return v[0]


def make_color(r: int, g: int, b: int, a: int = 255) -> Any:
    """Create a raylib Color, clamping channels to a byte."""
    c = rl.ffi.new("Color *")
    c[0].r = max(0, min(255, int(r)))
    c[0].g = max(0, min(255, int(g)))
    c[0].b = max(0, min(255, int(b)))
    c[0].a = max(0, min(255, int(a)))
    return c[0]


def rgb(color: Tuple[int, int, int], alpha: float = 1.0) -> Any:
    return make_color(color[0], color[1], color[2], int(255 * alpha))


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    """Draw text with encoding fallback."""
    try:
        rl.DrawText(text, int(x), int(y), int(size), color)
    except TypeError:
        rl.DrawText(text.encode('utf-8'), int(x), int(y), int(size), color)


def measure_text(text: str, size: int) -> int:
    """Measure text width with encoding fallback."""
    try:
        return rl.MeasureText(text, int(size))
    except TypeError:
        return rl.MeasureText(text.encode('utf-8'), int(size))


def texture_from_pil(img: Image.Image) -> Tuple[Any, int, int]:
    """Upload a decoded Pillow image. Must run on the UI (GL) thread."""
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    w, h = img.size
    pixels = rl.ffi.new("unsigned char[]", img.tobytes())
    image = rl.ffi.new("Image *")
    image[0].data = rl.ffi.cast("void *", pixels)
    image[0].width = w
    image[0].height = h
    image[0].mipmaps = 1
    image[0].format = rl.PIXELFORMAT_UNCOMPRESSED_R8G8B8A8
    tex = rl.LoadTextureFromImage(image[0])
    rl.SetTextureFilter(tex, rl.TEXTURE_FILTER_BILINEAR)
    return tex, w, h


def unload_texture(tex: Any) -> None:
    if is_texture_valid(tex):
        rl.UnloadTexture(tex)


def get_texture_id(tex: Any) -> int:
    """Safely get texture ID."""
    return getattr(tex, 'id', 0) or 0


def is_texture_valid(tex: Any) -> bool:
    """Check if texture is valid and loaded."""
    return get_texture_id(tex) > 0


__all__ = [
    'rl',
    'make_rect',
    'make_vec2',
    'make_color',
    'rgb',
    'draw_text',
    'measure_text',
    'texture_from_pil',
    'unload_texture',
    'get_texture_id',
    'is_texture_valid',
]
