"""HTTP surface smoke tests (FastAPI TestClient)."""

import pytest
from fastapi.testclient import TestClient

from wander_ledger.core.config import Settings
from wander_ledger.main import create_app

from tests.conftest import FailingKeyValueStore


def _settings(**kw):
    base = dict(storage_backend="memory", rate_provider="static", debug=False)
    base.update(kw)
    return Settings(**base)


@pytest.fixture
def client():
    app = create_app(settings_override=_settings())
    with TestClient(app) as c:
        yield c


def _expense(**kw):
    body = {"amount": 100, "currency": "EUR", "date": "2024-03-01", "category": "food_drink"}
    body.update(kw)
    return body


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Wander Ledger API"
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["rate_pairs"] > 0
    assert "X-Request-ID" in resp.headers


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"x-request-id": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_currencies(client):
    assert len(client.get("/currencies/").json()) == 40
    assert [c["code"] for c in client.get("/currencies/popular").json()] == [
        "USD", "EUR", "GBP", "JPY", "CNY", "AUD", "CAD", "CHF",
    ]
    assert {c["code"] for c in client.get("/currencies/", params={"q": "krona"}).json()} == {"SEK"}
    assert client.get("/currencies/eur").json()["symbol"] == "€"
    missing = client.get("/currencies/XYZ")
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


def test_convert_and_format(client):
    resp = client.post(
        "/conversions/", json={"amount": 100, "from_currency": "eur", "to_currency": "USD"}
    )
    assert resp.status_code == 200
    # Seed table: 1 USD = 0.92 EUR.
    assert resp.json()["converted_amount"] == 108.7

    home = client.post("/conversions/home", json={"amount": 100, "currency": "USD"})
    assert home.json()["amount"] == 100

    fmt = client.post("/conversions/format", json={"amount": 1234.5, "currency": "USD"})
    assert fmt.json() == {"formatted": "$1,234.50"}
    compact = client.post(
        "/conversions/format",
        json={"amount": 1234.5, "currency": "USD", "options": {"compact": True}},
    )
    assert compact.json() == {"formatted": "$1.2K"}


def test_unknown_currency_is_validation_error(client):
    resp = client.post(
        "/conversions/", json={"amount": 1, "from_currency": "XYZ", "to_currency": "USD"}
    )
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_rates(client):
    table = client.get("/rates/").json()
    assert table["last_updated"] is not None
    assert client.get("/rates/EUR/JPY").json()["source"] == "cached"
    refreshed = client.post("/rates/refresh")
    assert refreshed.status_code == 200
    assert refreshed.json()["rate_pairs"] == len(table["rates"])
    assert client.get("/rates/ABC/USD").status_code == 400


def test_preferences(client):
    assert client.get("/preferences/").json()["home_currency"] == "USD"
    resp = client.patch("/preferences/", json={"rounding_mode": "up", "rounding_precision": 0})
    assert resp.json()["rounding_mode"] == "up"
    assert client.put("/preferences/home-currency", json={"currency": "eur"}).json()["home_currency"] == "EUR"
    fav = client.post("/preferences/favorites/THB/toggle").json()
    assert "THB" in fav["favorite_currencies"]
    assert client.post("/preferences/recent/JPY").json()["recent_currencies"][0] == "JPY"
    assert client.post("/preferences/reset").json()["home_currency"] == "USD"
    assert client.patch("/preferences/", json={}).status_code == 422


def test_expense_lifecycle_refreshes_budget(client):
    budget = client.post(
        "/budgets/",
        json={
            "name": "Lisbon",
            "total_amount": 200,
            "currency": "USD",
            "alerts": [{"id": "a50", "type": "threshold", "threshold": 50}],
        },
    )
    assert budget.status_code == 201

    created = client.post("/expenses/", json=_expense())
    assert created.status_code == 201
    expense = created.json()
    assert expense["converted_amount"] == 108.7

    after_add = client.get("/budgets/").json()
    assert after_add["spent"] == 108.7
    assert [a["id"] for a in client.get("/budgets/alerts").json()] == ["a50"]

    patched = client.patch(f"/expenses/{expense['id']}", json={"amount": 10})
    assert patched.json()["converted_amount"] == 10.87
    assert client.get("/budgets/").json()["spent"] == 10.87

    summary = client.get("/expenses/summary").json()
    assert summary["count"] == 1
    assert summary["by_category"] == {"food_drink": 10}

    assert client.delete(f"/expenses/{expense['id']}").status_code == 204
    assert client.get(f"/expenses/{expense['id']}").status_code == 404
    assert client.get("/budgets/").json()["spent"] == 0
    # Sticky alert.
    assert [a["id"] for a in client.get("/budgets/alerts").json()] == ["a50"]


def test_expense_validation_and_filters(client):
    assert client.post("/expenses/", json=_expense(category="spa")).status_code == 422
    assert client.post("/expenses/", json=_expense(amount="lots")).status_code == 422
    client.post("/expenses/", json=_expense(trip_id="t1"))
    client.post("/expenses/", json=_expense(currency="USD", category="tips"))
    assert len(client.get("/expenses/", params={"trip_id": "t1"}).json()) == 1
    assert len(client.get("/expenses/", params={"category": "tips"}).json()) == 1
    assert len(client.get("/expenses/", params={"currency": "usd"}).json()) == 1
    assert client.get("/expenses/", params={"category": "spa"}).status_code == 400
    assert client.patch("/expenses/exp_nope", json={"amount": 1}).status_code == 404


def test_budget_endpoints(client):
    assert client.get("/budgets/").status_code == 404
    assert client.patch("/budgets/", json={"total_amount": 10}).status_code == 404
    client.post("/budgets/", json={"name": "Trip", "total_amount": 100, "currency": "USD", "trip_id": "t9"})
    updated = client.patch("/budgets/", params={"trip_id": "t9"}, json={"total_amount": 300})
    assert updated.json()["remaining"] == 300
    assert client.post("/budgets/refresh", params={"trip_id": "t9"}).status_code == 200


def test_cash_wallet(client):
    assert client.post("/cash-wallet/withdraw", json={"currency": "EUR", "amount": 200}).status_code == 201
    client.post("/cash-wallet/spend", json={"currency": "EUR", "amount": 50, "description": "Market"})
    assert client.get("/cash-wallet/balances/EUR").json() == {"currency": "EUR", "amount": 150}
    exchanged = client.post(
        "/cash-wallet/exchange",
        json={"from_currency": "EUR", "from_amount": 100, "to_currency": "GBP", "to_amount": 85},
    )
    assert exchanged.json()["description"] == "Exchange EUR to GBP"
    wallet = client.get("/cash-wallet/").json()
    assert {b["currency"]: b["amount"] for b in wallet["balances"]} == {"EUR": 50, "GBP": 85}
    assert len(wallet["transactions"]) == 3
    bad = client.post(
        "/cash-wallet/transactions",
        json={"type": "exchange", "currency": "EUR", "amount": 1, "date": "2024-03-01"},
    )
    assert bad.status_code == 422


def test_quick_conversions_and_trip_settings(client):
    client.post("/conversions/quick", json={"from_currency": "USD", "to_currency": "EUR"})
    assert len(client.get("/conversions/quick").json()) == 1
    assert client.get("/trips/rome/currency-settings").status_code == 404
    put = client.put(
        "/trips/rome/currency-settings",
        json={"primary_currency": "EUR", "budget_currency": "USD", "local_currencies": ["EUR"]},
    )
    assert put.status_code == 200
    assert client.get("/trips/rome/currency-settings").json()["trip_id"] == "rome"


def test_unknown_route_is_not_found(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "not_found", "detail": "No route for GET /nowhere"}


def test_storage_failure_maps_to_503(client):
    service = client.app.state.currency_service
    service.store.backend = FailingKeyValueStore()
    # Query paths degrade to empty results.
    assert client.get("/expenses/").json() == []
    resp = client.post("/expenses/", json=_expense())
    assert resp.status_code == 503
    assert resp.json()["error"] == "storage_unavailable"


def test_sqlite_backend_persists_between_apps(tmp_path):
    settings = _settings(storage_backend="sqlite", db_path=tmp_path / "ledger.sqlite3")
    with TestClient(create_app(settings_override=settings)) as first:
        first.post("/expenses/", json=_expense(currency="USD", amount=42))
    with TestClient(create_app(settings_override=settings)) as second:
        assert [e["amount"] for e in second.get("/expenses/").json()] == [42]


@pytest.mark.parametrize("bad", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_amounts_are_rejected(client, bad):
    body = '{"amount": %s, "currency": "EUR", "date": "2024-03-01"}' % bad
    headers = {"content-type": "application/json"}
    resp = client.post("/expenses/", content=body, headers=headers)
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"
    conversion = client.post(
        "/conversions/",
        content='{"amount": %s, "from_currency": "EUR", "to_currency": "USD"}' % bad,
        headers=headers,
    )
    assert conversion.status_code == 422
    budget = client.post(
        "/budgets/",
        content='{"name": "x", "total_amount": %s, "currency": "USD"}' % bad,
        headers=headers,
    )
    assert budget.status_code == 422
    assert client.get("/expenses/").json() == []
    assert client.get("/expenses/summary").json()["total_in_home_currency"] == 0


def test_large_amount_is_stored_and_summarized(client):
    resp = client.post("/expenses/", json=_expense(amount=1e27))
    assert resp.status_code == 201
    assert resp.json()["converted_amount"] == pytest.approx(1e27 / 0.92)
    summary = client.get("/expenses/summary").json()
    assert summary["by_currency"] == {"EUR": 1e27}
