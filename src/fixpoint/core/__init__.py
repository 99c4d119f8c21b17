"""
Core fixed-point types, integer primitives, and serialization contracts.

This module has no state and performs no I/O.
"""
