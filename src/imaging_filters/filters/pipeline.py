"""
pipeline.py - name-based dispatch over the filters in filter_model

Groups the filter choice in a small dataclass (like the sensor/optics
parameter objects of the imaging pipeline) so front ends only have to build
``FilterParams`` and call ``apply_filter``.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from imaging_filters.core.matrix import Matrix
from imaging_filters.filters.filter_model import blur, normalize, quantization, sobel

logger = logging.getLogger(__name__)

FILTER_NAMES = ("blur", "sobel", "quantization", "normalize")

_ALIASES = {
    "quant": "quantization",
    "quantize": "quantization",
    "edges": "sobel",
    "gaussian": "blur",
    "clamp": "normalize",
}


@dataclass
class FilterParams:
    """
    Filter selection.

    name : one of 'blur' | 'sobel' | 'quantization' | 'normalize'
           (aliases: 'gaussian', 'edges', 'quant', 'quantize', 'clamp')
    levels : number of intensity buckets (quantization only)
    """
    name: str = "blur"
    levels: int = 4

    def canonical_name(self) -> str:
        key = (self.name or "").lower().strip()
        key = _ALIASES.get(key, key)
        if key not in FILTER_NAMES:
            raise ValueError(f"Unsupported filter: {self.name!r}. Choose from {', '.join(FILTER_NAMES)}.")
        return key


def apply_filter(image: Matrix, params: FilterParams) -> Matrix:
    """Run the filter named in ``params`` on ``image`` and return a new matrix."""
    name = params.canonical_name()
    logger.debug("apply_filter: %s on %dx%d image", name, image.rows, image.cols)

    if name == "blur":
        return blur(image)
    if name == "sobel":
        return sobel(image)
    if name == "quantization":
        return quantization(image, params.levels)
    return normalize(image)
