"""
#python -m main_filters                                   # blur a synthetic checkerboard
#python -m main_filters --filter sobel --scene siemens --preview

main_filters.py - Minimal command-line front end: input → filter → outputs

WHAT THIS FILE DOES
-------------------
1) Builds the input matrix from one of:
     • a text matrix file (--input, optional --rows/--cols),
     • an image file (--image, converted to gray 0..255),
     • a synthetic scene (--scene/--size; the default).
2) Runs one filter (blur | sobel | quantization | normalize).
3) Writes the result as text (--output), prints it (--print), and optionally
   saves a before/after preview figure and the filtered image (--preview).
4) Logs a short summary: shape, distinct intensities, SNR vs the input.

USAGE (run from repo root after `pip install -e .`)
---------------------------------------------------
  python -m main_filters --filter quantization --levels 4 --scene gradient --print
  python -m main_filters --input image.txt --rows 128 --cols 128 --filter blur --output out.txt

NOTES
-----
• Library errors (bad shapes, bad indices, bad levels) are logged and the
  process exits with status 1.

© 2025 Ali Pouya - Imaging Filters Classic
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from imaging_filters.core.matrix import Matrix
from imaging_filters.errors import MatrixError
from imaging_filters.filters.pipeline import FILTER_NAMES, FilterParams, apply_filter
from imaging_filters.logging_config import setup_logging
from imaging_filters.scenes.scene_generator import generate_scene
from imaging_filters.utils.image_io import load_image, load_matrix_text, save_image, save_matrix_text
from imaging_filters.utils.metrics_module import compute_snr, intensity_histogram, save_preview

logger = logging.getLogger("imaging_filters.cli")


def load_input(args: argparse.Namespace) -> Matrix:
    """Pick the input source: text file, then image file, then synthetic scene."""
    if args.input:
        return load_matrix_text(args.input, rows=args.rows, cols=args.cols)
    if args.image:
        return load_image(args.image)
    logger.info("Generating '%s' scene (%d px)", args.scene, args.size)
    return generate_scene(kind=args.scene, size=args.size)


def run_once(args: argparse.Namespace) -> Matrix:
    """
    Execute one pass: load → filter → save/print.

    Returns the filtered matrix.
    """
    image = load_input(args)
    params = FilterParams(name=args.filter, levels=args.levels)
    result = apply_filter(image, params)

    if args.output:
        save_matrix_text(result, args.output)

    if args.preview:
        outpath = Path(args.outdir)
        save_preview(image, result, outpath / f"{params.canonical_name()}_preview.png", title=params.canonical_name())
        save_image(result, outpath / f"{params.canonical_name()}.png")
        logger.info("Saved preview to: %s", outpath.resolve())

    if args.print:
        result.print()
        sys.stdout.write("\n")

    values, _ = intensity_histogram(result)
    logger.info(
        "%s: %dx%d | %d distinct intensities | SNR vs input ≈ %.2f dB",
        params.canonical_name(), result.rows, result.cols, len(values), compute_snr(result, image),
    )
    return result


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Small CLI for the filter pipeline."""
    p = argparse.ArgumentParser(description="Imaging Filters (input → filter → outputs)")
    p.add_argument("--filter", default="blur", help=" | ".join(FILTER_NAMES))
    p.add_argument("--levels", type=int, default=4, help="quantization levels (1..256)")
    p.add_argument("--input", default=None, help="text matrix file")
    p.add_argument("--rows", type=int, default=None, help="rows of the text matrix (inferred if omitted)")
    p.add_argument("--cols", type=int, default=None, help="cols of the text matrix (inferred if omitted)")
    p.add_argument("--image", default=None, help="image file (PNG/JPEG), converted to gray")
    p.add_argument("--scene", default="checker",
                   help="slanted_edge | barcode | gradient | siemens_star | checker")
    p.add_argument("--size", type=int, default=64, help="scene canvas size (pixels)")
    p.add_argument("--output", default=None, help="write the result as a text matrix")
    p.add_argument("--outdir", default="outputs", help="directory for preview outputs")
    p.add_argument("--preview", action="store_true", help="save before/after figure and filtered image")
    p.add_argument("--print", action="store_true", help="print the result matrix to stdout")
    p.add_argument("--verbose", action="store_true", help="debug logging")
    p.add_argument("--log-file", default=None, help="also write logs to this file")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    try:
        run_once(args)
    except (MatrixError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
