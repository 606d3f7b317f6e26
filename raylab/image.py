"""Framebuffer encoding to binary PPM and PNG."""

from __future__ import annotations

import struct
import zlib
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

from raylab.mathutil import clamp
from raylab.vector import Vec3

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _check_size(framebuffer: Sequence[Vec3], width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid image size {width}x{height}")
    if len(framebuffer) != width * height:
        raise ValueError(
            f"framebuffer holds {len(framebuffer)} pixels, expected {width * height}"
        )


def _to_byte(value: float, gamma: float = 1.0) -> int:
    return int(255 * clamp(0, 1, value) ** gamma)


def encode_ppm(framebuffer: Sequence[Vec3], width: int, height: int) -> bytes:
    """Binary PPM (P6) with a 0.6 gamma applied to each channel."""
    _check_size(framebuffer, width, height)
    header = f"P6\n{width} {height}\n255\n".encode("ascii")
    body = bytes(_to_byte(c, 0.6) for pixel in framebuffer for c in pixel)
    return header + body


def _chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


def _rows(framebuffer: Sequence[Vec3], width: int, height: int) -> Iterable[bytes]:
    for row in range(height):
        pixels = framebuffer[row * width:(row + 1) * width]
        yield b"\x00" + bytes(_to_byte(c) for pixel in pixels for c in pixel)


def encode_png(framebuffer: Sequence[Vec3], width: int, height: int) -> bytes:
    """8-bit RGB PNG with linear (clamped) channel values."""
    _check_size(framebuffer, width, height)
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    raw = b"".join(_rows(framebuffer, width, height))
    return (
        _PNG_SIGNATURE
        + _chunk(b"IHDR", ihdr)
        + _chunk(b"IDAT", zlib.compress(raw))
        + _chunk(b"IEND", b"")
    )


def save_images(
    framebuffer: Sequence[Vec3],
    width: int,
    height: int,
    directory: Union[str, Path] = ".",
) -> Tuple[Path, Path]:
    """Write ``image.png`` and ``binary.ppm`` into ``directory``; return their paths."""
    out = Path(directory)
    png_path = out / "image.png"
    ppm_path = out / "binary.ppm"
    png_path.write_bytes(encode_png(framebuffer, width, height))
    ppm_path.write_bytes(encode_ppm(framebuffer, width, height))
    return png_path, ppm_path