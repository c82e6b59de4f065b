"""
imaging_filters.scenes
----------------------
Synthetic test targets (edge, barcode, gradient, Siemens star, checker)
returned as 0..255 intensity matrices.
"""
