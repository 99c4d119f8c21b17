"""
Tests for pydantic integration

Fix classes used as model field types serialize to the raw magnitude and
validate from either an instance or an integer in range.
"""

import pytest
from pydantic import BaseModel, ValidationError

from fixpoint.core.contracts import magnitude_schema
from fixpoint.core.domain.aliases import si
from fixpoint.core.domain.fix import Fix
from fixpoint.core.math.primitives import I64, U8

Centi = Fix[I64, 10, -2]
SmallCenti = Fix[U8, 10, -2]


class Invoice(BaseModel):
    """Model with fixed-point money fields."""

    total: Centi
    discount: SmallCenti = SmallCenti(0)

    model_config = {"frozen": True}


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidation:
    """Building models from instances and magnitudes"""

    def test_from_instance(self) -> None:
        invoice = Invoice(total=Centi(12_34))
        assert invoice.total == Centi(12_34)
        assert type(invoice.total) is Centi

    def test_from_int(self) -> None:
        invoice = Invoice(total=12_34, discount=50)
        assert invoice.total == Centi(12_34)
        assert invoice.discount == SmallCenti(50)

    def test_default(self) -> None:
        assert Invoice(total=1).discount == SmallCenti(0)

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(total=1, discount=256)

    def test_other_scale_instance_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(total=si.Milli(1))

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(total="abc")


# =============================================================================
# SERIALIZATION
# =============================================================================


class TestSerialization:
    """Wire form is the raw magnitude"""

    def test_model_dump(self) -> None:
        invoice = Invoice(total=Centi(12_34), discount=SmallCenti(5))
        assert invoice.model_dump() == {"total": 1234, "discount": 5}

    def test_model_dump_json(self) -> None:
        invoice = Invoice(total=Centi(12_34))
        assert invoice.model_dump_json() == '{"total":1234,"discount":0}'

    def test_json_round_trip(self) -> None:
        invoice = Invoice(total=Centi(-99), discount=SmallCenti(7))
        restored = Invoice.model_validate_json(invoice.model_dump_json())
        assert restored == invoice

    def test_json_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice.model_validate_json('{"total": 1, "discount": 300}')


# =============================================================================
# JSON SCHEMA
# =============================================================================


class TestJsonSchema:
    """Generated field schema matches the magnitude contract"""

    def test_field_schema(self) -> None:
        schema = Invoice.model_json_schema()
        discount = schema["properties"]["discount"]
        assert discount["type"] == "integer"
        assert discount["minimum"] == 0
        assert discount["maximum"] == 255

    def test_agrees_with_contract(self) -> None:
        field = Invoice.model_json_schema()["properties"]["total"]
        contract = magnitude_schema(Centi)
        assert field["minimum"] == contract["minimum"]
        assert field["maximum"] == contract["maximum"]
