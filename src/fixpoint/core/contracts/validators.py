"""
Magnitude Contract Validators

The wire form of a fixed-point value is exactly its raw magnitude: a JSON
integer. Base and exponent are never written; whoever reads the data must
name the target Fix class out of band.

Each Fix class maps to a JSON Schema (draft 2020-12) restricting the integer to
the range of its magnitude type. Validation uses the jsonschema library.
"""

import json
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from fixpoint.core.domain.fix import Fix

SCHEMA_DIALECT: Final[str] = "https://json-schema.org/draft/2020-12/schema"


# =============================================================================
# SCHEMA
# =============================================================================


def magnitude_schema(fix_cls: type[Fix]) -> Dict[str, Any]:
    """
    JSON Schema for the serialized form of a Fix class.

    Args:
        fix_cls: Parametrized Fix class

    Returns:
        Schema dict accepting integers within the magnitude type's range

    Raises:
        TypeError: If fix_cls is not a parametrized Fix class
    """
    if not (isinstance(fix_cls, type) and issubclass(fix_cls, Fix)) or fix_cls.BITS is None:
        raise TypeError(f"expected a parametrized Fix class, got {fix_cls!r}")

    return {
        "$schema": SCHEMA_DIALECT,
        "title": fix_cls.__name__,
        "description": (
            f"Raw magnitude of a {fix_cls.BITS.name} fixed-point value "
            f"scaled by {fix_cls.BASE}^{fix_cls.EXP}"
        ),
        "type": "integer",
        "minimum": fix_cls.BITS.min,
        "maximum": fix_cls.BITS.max,
    }


# =============================================================================
# VALIDATOR
# =============================================================================


class MagnitudeValidator:
    """
    Validator of serialized magnitudes for one Fix class.

    Encapsulates schema construction and a Draft202012Validator.
    """

    def __init__(self, fix_cls: type[Fix]):
        """
        Args:
            fix_cls: Parametrized Fix class the data is meant for
        """
        self.fix_cls = fix_cls
        self.schema = magnitude_schema(fix_cls)
        try:
            Draft202012Validator.check_schema(self.schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid magnitude schema for {fix_cls.__name__}: {e}")
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: If data is not an in-range integer
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_magnitude(fix_cls: type[Fix], data: Any) -> None:
    """
    Validate serialized data for fix_cls.

    Raises:
        ValidationError: If data does not match the schema
    """
    MagnitudeValidator(fix_cls).validate(data)


def dump(value: Fix) -> int:
    """Serialized form of a value: its raw magnitude."""
    return value.bits


def dumps(value: Fix) -> str:
    """JSON text of a value's raw magnitude."""
    return json.dumps(dump(value))


def load(fix_cls: type[Fix], data: Any) -> Fix:
    """
    Rebuild a value of fix_cls from its serialized magnitude.

    Integral floats (1.0) are accepted, as JSON Schema treats them as integers.

    Raises:
        ValidationError: If data is not an in-range integer
    """
    validate_magnitude(fix_cls, data)
    return fix_cls(int(data))


def loads(fix_cls: type[Fix], text: str) -> Fix:
    """
    Rebuild a value of fix_cls from JSON text.

    Raises:
        json.JSONDecodeError: If text is not valid JSON
        ValidationError: If the decoded data is not an in-range integer
    """
    return load(fix_cls, json.loads(text))
