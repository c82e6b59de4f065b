"""
metrics_module.py - small metrics helpers for the filter pipeline

WHAT THIS MODULE PROVIDES
-------------------------
• compute_snr(filtered, reference)
    Frame-wise signal-to-noise estimate using the reference (pre-filter)
    image as "signal" and the difference as "noise". Quick way to see how
    far a filter moved the image.

• intensity_histogram(image)
    Distinct intensities and their counts. After quantization there are at
    most ``levels`` distinct values.

• plot_histogram(image)
    Basic histogram over the 0..255 intensity range.

• save_preview(before, after, path)
    Side-by-side "Input | Filtered" figure written to disk.

© 2025 Ali Pouya - Imaging Filters (classic edition)
"""

from __future__ import annotations
from pathlib import Path
from typing import Tuple
import numpy as np
import matplotlib.pyplot as plt

from imaging_filters.core.matrix import Matrix


# -----------------------------------------------------------------------------
# Simple SNR (frame-level)
# -----------------------------------------------------------------------------
def compute_snr(filtered: Matrix, reference: Matrix) -> float:
    """
    Compute a frame-level SNR in dB against the unfiltered reference.

    Definition
    ----------
    SNR = 20 * log10( ||ref||_2 / ||ref - filtered||_2 )

    Returns ``inf`` when the two images are identical.
    """
    ref = reference.to_array().astype(np.float64)
    y = filtered.to_array().astype(np.float64)
    if ref.shape != y.shape:
        raise ValueError(f"Shape mismatch: {y.shape} vs reference {ref.shape}")

    num = np.linalg.norm(ref.ravel())
    den = np.linalg.norm((ref - y).ravel())
    if den == 0.0:
        return float("inf")
    return float(20.0 * np.log10(max(num, 1e-12) / den))


# -----------------------------------------------------------------------------
# Histograms
# -----------------------------------------------------------------------------
def intensity_histogram(image: Matrix) -> Tuple[np.ndarray, np.ndarray]:
    """
    Distinct intensities of ``image`` and how often each occurs.

    Returns
    -------
    values : float32 ndarray, sorted ascending
    counts : int ndarray, same length
    """
    values, counts = np.unique(image.to_array(), return_counts=True)
    return values.astype(np.float32), counts


def plot_histogram(image: Matrix, title: str = "Histogram", bins: int = 64):
    """
    Plot a histogram of intensities over [0, 256).

    Returns the figure so callers can save or close it.
    """
    fig, ax = plt.subplots()
    ax.hist(image.to_array().ravel(), bins=int(bins), range=(0.0, 256.0))
    ax.set_title(title)
    ax.set_xlabel("Intensity")
    ax.set_ylabel("Count")
    fig.tight_layout()
    return fig


# -----------------------------------------------------------------------------
# Before / after figure
# -----------------------------------------------------------------------------
def save_preview(before: Matrix, after: Matrix, path: str | Path, title: str = "Filtered") -> Path:
    """Save an "Input | <title>" figure to ``path`` and close it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, axs = plt.subplots(1, 2, figsize=(8, 4))
    axs[0].imshow(before.to_array(), cmap="gray", vmin=0, vmax=255); axs[0].set_title("Input"); axs[0].axis("off")
    axs[1].imshow(after.to_array(), cmap="gray", vmin=0, vmax=255);  axs[1].set_title(title);  axs[1].axis("off")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
