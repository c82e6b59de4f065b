"""
imaging_filters.filters
-----------------------
Stateless 3x3 stencil filters (normalize, convolution, quantization, blur,
sobel) and a name-based dispatcher driven by ``FilterParams``.
"""
