from wander_ledger.main import create_app
from fastapi.testclient import TestClient
from wander_ledger.core.config import Settings
import tempfile
import os
import json


def run():
    with tempfile.TemporaryDirectory() as d:
        db_path = os.path.join(d, "wallet.db")
        settings = Settings(
            storage_backend="sqlite", db_path=db_path, rate_provider="static"
        )
        app = create_app(settings_override=settings)
        with TestClient(app) as client:
            results = {}
            results["empty"] = client.get("/cash-wallet/").json()
            results["withdraw"] = client.post(
                "/cash-wallet/withdraw",
                json={"currency": "THB", "amount": 5000, "fees": 220},
            ).json()
            results["spend"] = client.post(
                "/cash-wallet/spend",
                json={"currency": "THB", "amount": 1200, "description": "Night market"},
            ).json()
            results["exchange"] = client.post(
                "/cash-wallet/exchange",
                json={
                    "from_currency": "THB",
                    "from_amount": 2000,
                    "to_currency": "MYR",
                    "to_amount": 255,
                },
            ).json()
            results["thb_balance"] = client.get("/cash-wallet/balances/THB").json()
            results["wallet"] = client.get("/cash-wallet/").json()
            neg = client.post("/cash-wallet/spend", json={"currency": "THB", "amount": -5})
            results["negative_status"] = neg.status_code
            print(json.dumps(results, indent=2))


if __name__ == "__main__":
    run()
