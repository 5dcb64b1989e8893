"""
Core encodings registry, bit-exact conversions and numeric primitives.

This module contains the foundational building blocks that are independent
of the command line and text formatting layers.
"""
