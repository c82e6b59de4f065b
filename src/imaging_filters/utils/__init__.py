"""
imaging_filters.utils
---------------------
Text/image file IO and small metrics and plotting helpers.
"""
