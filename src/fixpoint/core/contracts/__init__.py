"""
Contract Validation Module

Validation and (de)serialization of fixed-point values in their wire form,
the raw magnitude.
"""

from .validators import (
    SCHEMA_DIALECT,
    MagnitudeValidator,
    dump,
    dumps,
    load,
    loads,
    magnitude_schema,
    validate_magnitude,
)

__all__ = [
    # Constants
    "SCHEMA_DIALECT",
    # Classes
    "MagnitudeValidator",
    # Functions
    "magnitude_schema",
    "validate_magnitude",
    "dump",
    "dumps",
    "load",
    "loads",
]
