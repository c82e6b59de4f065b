"""
scene_generator.py - synthetic test scenes as 0..255 intensity matrices

WHAT THIS MODULE PROVIDES
-------------------------
Lightweight generators for standard test targets, handy inputs for the
filters without any image file:
  • Slanted edge           - one strong step edge (Sobel response, blur width)
  • 1-D barcode strip      - alternating bars; edge density grows as bars narrow
  • Grayscale gradient     - every intensity level; quantization sanity checks
  • Siemens star           - radial frequency sweep; where blur merges wedges
  • Checkerboard           - high contrast tiles; edges in both directions

RETURNS
-------
All functions return a ``Matrix`` whose cells are integers in [0, 255].

© 2025 Ali Pouya - Imaging Filters (classic edition)
"""

from __future__ import annotations
import numpy as np

from imaging_filters.core.matrix import Matrix

MAX_INTENSITY = 255.0


# -----------------------------------------------------------------------------
# Utilities
# -----------------------------------------------------------------------------
def _to_matrix(img: np.ndarray) -> Matrix:
    """Scale a [0, 1] float pattern to integer intensities in [0, 255]."""
    img = np.clip(img.astype(np.float32, copy=False), 0.0, 1.0)
    return Matrix.from_array(np.rint(img * MAX_INTENSITY))


# -----------------------------------------------------------------------------
# Scene generators
# -----------------------------------------------------------------------------
def generate_slanted_edge(
    size: int = 64,
    angle_deg: float = 5.0,
    threshold: float = 0.0,
) -> Matrix:
    """
    Slanted binary edge (dark left, bright right).

    Parameters
    ----------
    size : int
        Square canvas size (pixels).
    angle_deg : float
        Edge angle (0 = vertical).
    threshold : float
        Offset added before the half-plane cut; useful to shift the edge.
    """
    h = w = int(size)
    xv, yv = np.meshgrid(np.arange(w), np.arange(h))
    ramp = (xv * np.cos(np.deg2rad(angle_deg)) + yv * np.sin(np.deg2rad(angle_deg))) - threshold
    return _to_matrix((ramp > w // 2).astype(np.float32))


def generate_barcode_scene(
    width: int = 64,
    height: int = 16,
    stripe_width: int = 4,
) -> Matrix:
    """
    Horizontal strip of alternating vertical bars.

    Parameters
    ----------
    width, height : int
        Output size (pixels).
    stripe_width : int
        Width of each bar (pixels).
    """
    x = np.arange(int(width))
    bars_01 = ((x // max(int(stripe_width), 1)) % 2).astype(np.float32)
    return _to_matrix(np.tile(bars_01, (int(height), 1)))


def generate_gradient_scene(
    width: int = 64,
    height: int = 64,
    horizontal: bool = True,
) -> Matrix:
    """Linear ramp from 0 to 255 along +x (or +y when ``horizontal`` is False)."""
    if horizontal:
        grad = np.tile(np.linspace(0, 1, int(width), dtype=np.float32), (int(height), 1))
    else:
        grad = np.tile(np.linspace(0, 1, int(height), dtype=np.float32)[:, None], (1, int(width)))
    return _to_matrix(grad)


def generate_siemens_star(
    size: int = 64,
    spokes: int = 16,
) -> Matrix:
    """
    Siemens star: alternating wedges radiating from center.

    Parameters
    ----------
    size : int
        Square canvas size (pixels).
    spokes : int
        Number of black/white transitions around 360°.
    """
    h = w = int(size)
    y, x = np.indices((h, w))
    cx, cy = (w - 1) / 2.0, (h - 1) / 2.0
    theta = np.arctan2(y - cy, x - cx)
    star = 0.5 * (1.0 + np.sign(np.cos(float(spokes) * theta)))
    return _to_matrix(star)


def generate_checker(
    size: int = 64,
    square_px: int = 8,
    invert: bool = False,
) -> Matrix:
    """Checkerboard with ``square_px`` tiles; ``invert`` swaps black and white."""
    h = w = int(size)
    y, x = np.indices((h, w))
    tiles = ((x // max(int(square_px), 1)) + (y // max(int(square_px), 1))) % 2
    img = 1.0 - tiles if invert else tiles
    return _to_matrix(img.astype(np.float32))


# -----------------------------------------------------------------------------
# Dispatcher (public API)
# -----------------------------------------------------------------------------
def generate_scene(kind: str, size: int, **kwargs) -> Matrix:
    """
    Dispatch scene generation by name.

    Parameters
    ----------
    kind : str
        One of: 'slanted_edge' | 'barcode' | 'gradient' | 'siemens_star' | 'checker'
        Also accepts the aliases 'edge', 'siemens', 'checkerboard'.
    size : int
        Base canvas size (pixels). The barcode uses it as width.

    Returns
    -------
    img : Matrix with integer cells in [0, 255]
    """
    k = (kind or "").lower().strip()

    if k in ("slanted_edge", "edge"):
        return generate_slanted_edge(
            size=int(size),
            angle_deg=float(kwargs.get("angle_deg", 5.0)),
            threshold=float(kwargs.get("threshold", 0.0)),
        )

    if k == "barcode":
        return generate_barcode_scene(
            width=int(size),
            height=int(kwargs.get("height", max(8, int(size) // 4))),
            stripe_width=int(kwargs.get("stripe_width", 4)),
        )

    if k == "gradient":
        return generate_gradient_scene(
            width=int(size),
            height=int(size),
            horizontal=bool(kwargs.get("horizontal", True)),
        )

    if k in ("siemens_star", "siemens"):
        return generate_siemens_star(
            size=int(size),
            spokes=int(kwargs.get("spokes", 16)),
        )

    if k in ("checker", "checkerboard"):
        return generate_checker(
            size=int(size),
            square_px=int(kwargs.get("square_px", 8)),
            invert=bool(kwargs.get("invert", False)),
        )

    # Fallback: gradient (safe for unknown names)
    return generate_gradient_scene(width=int(size), height=int(size))
