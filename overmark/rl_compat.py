"""raylib binding shim - overmark runs on raylibpy or python-raylib (cffi)."""

from __future__ import annotations
import io
from typing import Any

from PIL import Image

try:
    import raylibpy as rl
    RL_VERSION = "raylibpy"
except Exception:
    import raylib as rl
    RL_VERSION = "python-raylib"


def _struct(name: str, *values: Any, **fields: Any) -> Any:
    """Build a raylib struct by constructor, or through cffi when there is none."""
    ctor = getattr(rl, name, None)
    if ctor is not None:
        try:
            return ctor(*values)
        except Exception:
            pass
    ptr = rl.ffi.new(f"{name} *")
    for key, value in fields.items():
        setattr(ptr[0], key, value)
    return ptr[0]


def make_rect(x: float, y: float, w: float, h: float) -> Any:
    x, y, w, h = float(x), float(y), float(w), float(h)
    return _struct("Rectangle", x, y, w, h, x=x, y=y, width=w, height=h)


def make_vec2(x: float, y: float) -> Any:
    x, y = float(x), float(y)
    return _struct("Vector2", x, y, x=x, y=y)


def make_color(r: int, g: int, b: int, a: int = 255) -> Any:
    r, g, b, a = int(r), int(g), int(b), int(a)
    return _struct("Color", r, g, b, a, r=r, g=g, b=b, a=a)


def _call_with_text(fn, text: str, *args: Any) -> Any:
    """python-raylib wants bytes where raylibpy takes str."""
    try:
        return fn(text, *args)
    except TypeError:
        return fn(text.encode('utf-8'), *args)


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    _call_with_text(rl.DrawText, text, x, y, size, color)


def init_window(w: int, h: int, title: str) -> None:
    try:
        rl.InitWindow(w, h, title)
    except TypeError:
        rl.InitWindow(w, h, title.encode('utf-8'))


def texture_from_pil(img: Image.Image) -> Any:
    """Upload a Pillow image to the GPU through an in-memory PNG."""
    buf = io.BytesIO()
    img.convert("RGBA").save(buf, format="PNG")
    data = buf.getvalue()
    rl_img = _call_with_text(rl.LoadImageFromMemory, ".png", data, len(data))
    tex = rl.LoadTextureFromImage(rl_img)
    rl.UnloadImage(rl_img)
    return tex


def is_texture_valid(tex: Any) -> bool:
    return (getattr(tex, 'id', 0) or 0) > 0


def unload_texture(tex: Any) -> None:
    if is_texture_valid(tex):
        rl.UnloadTexture(tex)


__all__ = [
    'rl',
    'RL_VERSION',
    'make_rect',
    'make_vec2',
    'make_color',
    'draw_text',
    'init_window',
    'texture_from_pil',
    'is_texture_valid',
    'unload_texture',
]
