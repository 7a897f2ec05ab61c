"""Unit tests for farmer registration and load intake"""

import pytest
from datetime import date
from decimal import Decimal
from uzhavar_gateway.domain.models import QualityGrade, LoadStatus
from uzhavar_gateway.domain.intake import register_farmer, receive_load
from uzhavar_gateway.domain.exceptions import InvalidInputError
from uzhavar_gateway.utils.date_utils import today_utc


def test_register_farmer(salem):
    farmer = register_farmer(salem, " Selvi ", "9000000001", village="Omalur", primary_crop="Brinjal")

    assert farmer.name == "Selvi"
    assert farmer.market_id == "M001"
    assert farmer.id.startswith("F-")


@pytest.mark.parametrize("name, phone", [("", "9000000001"), ("Selvi", ""), ("  ", "  ")])
def test_register_farmer_requires_name_and_phone(salem, name, phone):
    with pytest.raises(InvalidInputError):
        register_farmer(salem, name, phone)


def test_receive_load_defaults(ravi):
    load = receive_load(ravi, "Tomato", Decimal("120"))

    assert load.status == LoadStatus.PENDING
    assert load.grade == QualityGrade.A
    assert load.market_id == ravi.market_id
    assert load.farmer_id == "F001"
    assert load.arrival_date == today_utc()
    assert load.id.startswith("L-")


def test_receive_load_explicit_fields(ravi):
    load = receive_load(ravi, "Tomato", Decimal("80.5"), grade=QualityGrade.C, arrival_date=date(2024, 5, 1))

    assert load.quantity == Decimal("80.5")
    assert load.grade == QualityGrade.C
    assert load.arrival_date == date(2024, 5, 1)


@pytest.mark.parametrize("quantity", [Decimal("0"), Decimal("-5"), None])
def test_receive_load_rejects_non_positive_quantity(ravi, quantity):
    with pytest.raises(InvalidInputError):
        receive_load(ravi, "Tomato", quantity)


def test_receive_load_rejects_quantity_finer_than_grams(ravi):
    with pytest.raises(InvalidInputError):
        receive_load(ravi, "Tomato", Decimal("0.0004"))

    assert receive_load(ravi, "Tomato", Decimal("0.001")).quantity == Decimal("0.001")


def test_receive_load_requires_crop(ravi):
    with pytest.raises(InvalidInputError):
        receive_load(ravi, "  ", Decimal("10"))


def test_receive_load_rejects_cross_market(ravi):
    """A load must live in its farmer's market"""
    with pytest.raises(InvalidInputError):
        receive_load(ravi, "Tomato", Decimal("10"), market_id="M002")

    assert receive_load(ravi, "Tomato", Decimal("10"), market_id="M001").market_id == "M001"
