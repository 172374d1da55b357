from wander_ledger.main import create_app
from fastapi.testclient import TestClient
from wander_ledger.core.config import Settings
import tempfile
import os
import json


def run():
    with tempfile.TemporaryDirectory() as d:
        db_path = os.path.join(d, "ledger.db")
        settings = Settings(
            storage_backend="sqlite", db_path=db_path, rate_provider="static"
        )
        app = create_app(settings_override=settings)
        with TestClient(app) as client:
            results = {}
            results["budget"] = client.post(
                "/budgets/",
                json={
                    "name": "Europe",
                    "total_amount": 500,
                    "currency": "USD",
                    "alerts": [{"id": "half", "type": "threshold", "threshold": 50}],
                },
            ).json()
            results["dinner"] = client.post(
                "/expenses/",
                json={
                    "amount": 85,
                    "currency": "EUR",
                    "category": "food_drink",
                    "date": "2024-03-01",
                },
            ).json()
            results["hotel"] = client.post(
                "/expenses/",
                json={
                    "amount": 210,
                    "currency": "GBP",
                    "category": "accommodation",
                    "date": "2024-03-02",
                },
            ).json()
            results["summary"] = client.get("/expenses/summary").json()
            results["budget_after"] = client.get("/budgets/").json()
            results["alerts"] = client.get("/budgets/alerts").json()
            bad = client.post(
                "/expenses/",
                json={"amount": 1, "currency": "XYZ", "category": "other", "date": "2024-03-01"},
            )
            results["unsupported_status"] = bad.status_code
            results["unsupported_body"] = bad.json()
            print(json.dumps(results, indent=2))


if __name__ == "__main__":
    run()
