"""Unit tests for market dashboard totals"""

from dataclasses import replace
from decimal import Decimal
from uzhavar_gateway.domain.dashboard import summarize_market
from uzhavar_gateway.domain.models import LoadStatus


def test_summarize_market(ravi, anitha, tomato_load, onion_load, fixture_sales):
    sold_onion = replace(onion_load, status=LoadStatus.SOLD)

    summary = summarize_market([ravi, anitha], [tomato_load, sold_onion], fixture_sales)

    assert summary.farmer_count == 2
    assert summary.net_sales == Decimal("28262.5")
    assert summary.arrivals_kg == Decimal("750")
    assert summary.pending_loads == 1
    assert summary.crop_mix == {"Tomato": Decimal("250"), "Onion": Decimal("500")}


def test_summarize_empty_market():
    summary = summarize_market([], [], [])

    assert summary.farmer_count == 0
    assert summary.net_sales == 0
    assert summary.arrivals_kg == 0
    assert summary.pending_loads == 0
    assert summary.crop_mix == {}
