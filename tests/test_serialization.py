"""Tests for serialization helpers."""

from datetime import date, datetime, timezone
from decimal import Decimal

from ccb_ops.models import Modality, OperationStatus, validate_operation_input
from ccb_ops.serialization import serialize_column, serialize_value, to_dict


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_decimal_as_string(self) -> None:
        assert serialize_value(Decimal("1234.50")) == "1234.50"

    def test_enum_as_value(self) -> None:
        assert serialize_value(Modality.CONSIGNADO) == "consignado"

    def test_dates(self) -> None:
        assert serialize_value(date(2024, 3, 7)) == "2024-03-07"
        assert serialize_value(datetime(2024, 3, 7, 12, tzinfo=timezone.utc)) == "2024-03-07T12:00:00+00:00"

    def test_nested(self) -> None:
        value = {"items": [Decimal("1.5"), OperationStatus.ABERTO], "n": 3}
        assert serialize_value(value) == {"items": ["1.5", "aberto"], "n": 3}


class TestToDict:
    def test_payload(self, sample_form) -> None:
        data = to_dict(validate_operation_input(sample_form))

        assert data["limite"] == "15000.00"
        assert data["modalidade"] == "consignado"
        assert data["status"] == "pendente"
        assert data["pendencia"] is False

    def test_plain_dict(self) -> None:
        assert to_dict({"limite": Decimal("1")}) == {"limite": "1"}

    def test_other(self) -> None:
        assert to_dict(42) == {"value": "42"}


def test_serialize_column_keeps_driver_types() -> None:
    amount = Decimal("10.00")

    assert serialize_column(amount) is amount
    assert serialize_column(OperationStatus.PENDENTE) == "pendente"
    assert type(serialize_column(OperationStatus.PENDENTE)) is str
