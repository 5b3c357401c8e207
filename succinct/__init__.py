"""Block types, bit vectors, packed element storage and binary search for succinct data structures."""

__version__ = "0.5.3a0"