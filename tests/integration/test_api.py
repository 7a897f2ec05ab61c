"""Integration tests for API endpoints"""

import csv
import io
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from uzhavar_gateway.domain.exceptions import AssistantAPIError
from uzhavar_gateway.domain.prompts import UNAVAILABLE_REPLY
from uzhavar_gateway.utils.date_utils import today_utc

ADMIN = {"X-User-Role": "ADMIN"}


def _sell(client: TestClient, market_id: str, load_id: str, price=20, buyer="Reliance Fresh"):
    return client.post(
        f"/v1/markets/{market_id}/loads/{load_id}/sale",
        json={"price_per_unit": price, "buyer_name": buyer},
    )


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "uzhavar_sales_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_list_markets(client: TestClient):
    response = client.get("/v1/markets")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 6
    assert data[0] == {"id": "M001", "name": "Salem (Dhadagapatti)", "district": "Salem"}


def test_unknown_market_is_404(client: TestClient):
    assert client.get("/v1/markets/M999/farmers").status_code == 404


def test_register_and_list_farmers(client: TestClient):
    response = client.post(
        "/v1/markets/M002/farmers",
        json={"name": "Selvi", "phone": "9000000001", "village": "Pollachi", "primary_crop": "Coconut"},
    )

    assert response.status_code == 201
    farmer = response.json()
    assert farmer["market_id"] == "M002"
    assert farmer["id"].startswith("F-")

    names = [f["name"] for f in client.get("/v1/markets/M002/farmers").json()]
    assert names == ["Muthu Swamy", "Selvi"]


def test_register_farmer_validation(client: TestClient):
    assert client.post("/v1/markets/M001/farmers", json={"name": "Selvi"}).status_code == 422
    assert client.post("/v1/markets/M001/farmers", json={"name": "  ", "phone": "  "}).status_code == 422


def test_receive_load(client: TestClient):
    response = client.post(
        "/v1/markets/M001/loads",
        json={"farmer_id": "F001", "crop": "Tomato", "quantity": 320, "grade": "B"},
    )

    assert response.status_code == 201
    load = response.json()
    assert load["status"] == "PENDING"
    assert load["grade"] == "B"
    assert load["quantity"] == 320
    assert load["arrival_date"] == today_utc().isoformat()

    pending = client.get("/v1/markets/M001/loads", params={"status": "PENDING"}).json()
    assert {l["id"] for l in pending} == {"L102", load["id"]}


def test_receive_load_for_farmer_of_other_market(client: TestClient):
    """F003 is registered in Coimbatore (M002), not Salem"""
    response = client.post(
        "/v1/markets/M001/loads",
        json={"farmer_id": "F003", "crop": "Beans", "quantity": 90},
    )
    assert response.status_code == 404


def test_receive_load_rejects_zero_quantity(client: TestClient):
    response = client.post("/v1/markets/M001/loads", json={"farmer_id": "F001", "crop": "Tomato", "quantity": 0})
    assert response.status_code == 422


def test_receive_load_rejects_quantity_finer_than_grams(client: TestClient):
    response = client.post("/v1/markets/M001/loads", json={"farmer_id": "F001", "crop": "Tomato", "quantity": "0.0004"})

    assert response.status_code == 422
    assert len(client.get("/v1/markets/M001/loads").json()) == 3


def test_sale_amounts_match_stored_ledger(client: TestClient):
    """1.001kg at 1.11/kg: notice, response and stored sale agree"""
    load = client.post(
        "/v1/markets/M001/loads",
        json={"farmer_id": "F001", "crop": "Tomato", "quantity": "1.001"},
    ).json()

    response = _sell(client, "M001", load["id"], price="1.11")

    assert response.status_code == 201
    data = response.json()
    assert "Total: ₹1.1111. Deductions: ₹0.0556. Net Amount: ₹1.0555 will be credited" in data["notice"]["message"]

    stored = next(s for s in client.get("/v1/markets/M001/sales").json() if s["load_id"] == load["id"])
    assert stored["total_amount"] == data["sale"]["total_amount"] == 1.1111
    assert stored["deductions"] == data["sale"]["deductions"] == 0.0556
    assert stored["net_amount"] == data["sale"]["net_amount"] == 1.0555


def test_sale_rejects_price_finer_than_ledger_scale(client: TestClient):
    assert _sell(client, "M001", "L102", price="20.00001").status_code == 422


def test_sale_settles_load_and_logs_notice(client: TestClient):
    """150kg Grade B carrot at 20/kg -> 3000 total, 150 fee, 2850 net"""
    response = _sell(client, "M001", "L102")

    assert response.status_code == 201
    data = response.json()
    assert data["sale"]["total_amount"] == 3000
    assert data["sale"]["deductions"] == 150
    assert data["sale"]["net_amount"] == 2850
    assert data["sale"]["load_id"] == "L102"
    assert data["load"]["status"] == "SOLD"
    assert data["notice"]["farmer_name"] == "Lakshmi Narayanan"
    assert data["notice"]["message"] == (
        "Uzhavar360: Hi Lakshmi Narayanan, your 150kg of Carrot (Grade B) has been sold for ₹20/kg. "
        "Total: ₹3000. Deductions: ₹150. Net Amount: ₹2850 will be credited shortly."
    )

    loads = {l["id"]: l for l in client.get("/v1/markets/M001/loads").json()}
    assert loads["L102"]["status"] == "SOLD"

    sales = [s for s in client.get("/v1/markets/M001/sales").json() if s["load_id"] == "L102"]
    assert len(sales) == 1

    logs = client.get("/v1/markets/M001/sms-logs").json()
    assert logs[0]["id"] == data["notice"]["id"]


def test_double_sale_is_conflict_and_writes_nothing(client: TestClient):
    assert _sell(client, "M001", "L102").status_code == 201

    response = _sell(client, "M001", "L102", price=25, buyer="BigBasket")

    assert response.status_code == 409
    assert len(client.get("/v1/markets/M001/sales").json()) == 3
    assert len(client.get("/v1/markets/M001/sms-logs").json()) == 1


def test_sale_of_seeded_sold_load_is_conflict(client: TestClient):
    assert _sell(client, "M001", "L101").status_code == 409


def test_sale_of_unknown_load_is_404(client: TestClient):
    assert _sell(client, "M001", "L999").status_code == 404


def test_sale_of_load_from_other_market_is_404(client: TestClient):
    created = client.post(
        "/v1/markets/M002/loads",
        json={"farmer_id": "F003", "crop": "Beans", "quantity": 90},
    ).json()

    assert _sell(client, "M001", created["id"]).status_code == 404
    assert _sell(client, "M002", created["id"]).status_code == 201


def test_sale_input_validation(client: TestClient):
    assert _sell(client, "M001", "L102", price=0).status_code == 422
    assert _sell(client, "M001", "L102", buyer="   ").status_code == 422

    # Rejected attempts leave the load pending
    loads = {l["id"]: l for l in client.get("/v1/markets/M001/loads").json()}
    assert loads["L102"]["status"] == "PENDING"


def test_export_csv(client: TestClient):
    response = client.get("/v1/markets/M001/sales/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "Uzhavar360_Salem_Data.csv" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert len(rows) == 3
    assert rows[0] == ["Farmer", "Crop", "Qty (kg)", "Buyer", "Net Amount (₹)", "Timestamp"]
    assert rows[1] == ["Ravi Kumar", "Tomato", "250", "Zomato Hyperpure", "8312.5", "2023-10-24 10:30:00"]
    assert rows[2][0] == "Anitha Selvam"
    assert rows[2][4] == "19950"


def test_export_grows_with_sales(client: TestClient):
    _sell(client, "M001", "L102")

    lines = client.get("/v1/markets/M001/sales/export").text.splitlines()
    assert len(lines) == 4
    assert all(len(line.split(",")) == 6 for line in lines)


def test_daily_summaries_require_admin(client: TestClient):
    assert client.post("/v1/markets/M001/daily-summaries").status_code == 403
    assert client.post("/v1/markets/M001/daily-summaries", headers={"X-User-Role": "COLLECTOR"}).status_code == 403
    assert client.post("/v1/markets/M001/daily-summaries", headers={"X-User-Role": "JANITOR"}).status_code == 400


def test_daily_summaries_for_fixture_day(client: TestClient):
    response = client.post("/v1/markets/M001/daily-summaries", params={"day": "2023-10-24"}, headers=ADMIN)

    assert response.status_code == 200
    data = response.json()
    assert data["sent"] == 2
    assert data["day"] == "2023-10-24"
    assert [s["farmer_name"] for s in data["summaries"]] == ["Ravi Kumar", "Anitha Selvam"]
    assert data["summaries"][1]["message"] == (
        "Uzhavar360: Daily Summary for Anitha Selvam. "
        "Total earnings today: ₹19950. Thank you for using Uzhavar360."
    )
    assert len(client.get("/v1/markets/M001/sms-logs").json()) == 2


def test_daily_summaries_default_to_today(client: TestClient):
    _sell(client, "M001", "L102")

    data = client.post("/v1/markets/M001/daily-summaries", headers=ADMIN).json()

    assert data["day"] == today_utc().isoformat()
    assert data["sent"] == 1
    assert "₹2850" in data["summaries"][0]["message"]


def test_daily_summaries_with_no_sales(client: TestClient):
    response = client.post("/v1/markets/M001/daily-summaries", params={"day": "2020-01-01"}, headers=ADMIN)

    assert response.status_code == 200
    assert response.json()["sent"] == 0
    assert response.json()["summaries"] == []
    assert client.get("/v1/markets/M001/sms-logs").json() == []


def test_dashboard(client: TestClient):
    data = client.get("/v1/markets/M001/dashboard").json()

    assert data["market"]["district"] == "Salem"
    assert data["farmer_count"] == 3
    assert data["net_sales"] == 28262.5
    assert data["arrivals_kg"] == 900
    assert data["pending_loads"] == 1
    assert data["crop_mix"] == {"Tomato": 250, "Carrot": 150, "Onion": 500}


@patch("uzhavar_gateway.infrastructure.clients.assistant.AssistantClient.generate", new_callable=AsyncMock)
def test_assistant_reply(mock_generate: AsyncMock, client: TestClient):
    mock_generate.return_value = "Admins record sales from the Sales tab."

    response = client.post("/v1/assistant", json={"prompt": "Who records sales?"})

    assert response.status_code == 200
    assert response.json()["reply"] == "Admins record sales from the Sales tab."
    mock_generate.assert_awaited_once_with("Who records sales?")


@patch("uzhavar_gateway.infrastructure.clients.assistant.AssistantClient.generate", new_callable=AsyncMock)
def test_assistant_failure_returns_fallback(mock_generate: AsyncMock, client: TestClient):
    mock_generate.side_effect = AssistantAPIError("upstream down")

    response = client.post("/v1/assistant", json={"prompt": "Who records sales?"})

    assert response.status_code == 200
    assert response.json()["reply"] == UNAVAILABLE_REPLY
