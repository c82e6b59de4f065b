"""
imaging_filters.core
--------------------
The ``Matrix`` container: row-major float32 buffer with flat and (row, col)
access, arithmetic operators and a plain-text format.
"""
