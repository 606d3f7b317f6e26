"""Scalar helpers: clamping, quadratic roots, random numbers and a progress bar."""

from __future__ import annotations

import math
import random
import sys
from typing import Optional, TextIO, Tuple

BAR_WIDTH = 70


def clamp(lo: float, hi: float, v: float) -> float:
    """Clamp ``v`` to the range [lo, hi]."""
    return max(lo, min(hi, v))


def deg2rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * math.pi / 180.0


def solve_quadratic(a: float, b: float, c: float) -> Optional[Tuple[float, float]]:
    """Solve ``a*x^2 + b*x + c = 0``.

    Returns the two roots in ascending order, or ``None`` when there is no
    real solution.
    """
    discr = b * b - 4 * a * c
    if discr < 0:
        return None
    if discr == 0:
        x0 = x1 = -0.5 * b / a
    else:
        root = math.sqrt(discr)
        q = -0.5 * (b + root) if b > 0 else -0.5 * (b - root)
        x0 = q / a
        x1 = c / q
    if x0 > x1:
        x0, x1 = x1, x0
    return x0, x1


def random_float() -> float:
    """Uniform random number in [0, 1)."""
    return random.random()


def progress_bar(progress: float) -> str:
    """Render a text progress bar for ``progress`` in [0, 1]."""
    pos = int(BAR_WIDTH * progress)
    cells = "".join(
        "=" if i < pos else ">" if i == pos else " " for i in range(BAR_WIDTH)
    )
    return f"[{cells}] {int(progress * 100.0)} %"


def update_progress(progress: float, stream: Optional[TextIO] = None) -> None:
    """Redraw the progress bar in place on ``stream`` (standard output by default)."""
    out = stream if stream is not None else sys.stdout
    out.write(progress_bar(progress) + "\r")
    out.flush()