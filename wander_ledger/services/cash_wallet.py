from __future__ import annotations

"""Cash wallet helpers over the `cash-wallet` document.

Keeps balance logic centralized so routers and the facade share it:
    - exchange:                 from balance -= from_amount, to balance += to_amount
    - withdraw / receive / adjustment: balance += amount
    - spend:                    balance -= amount
Balance rows are created on first touch and never removed; they may go
negative (no overdraft check). After every transaction the home-currency
total is recomputed from all balances; balances with no rate path count 0.
Fees are recorded on the transaction only, never deducted.
"""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from wander_ledger.core.errors import StorageError
from wander_ledger.db.store import JsonStore
from wander_ledger.models.cash import (
    CashBalance,
    CashTransaction,
    CashTransactionIn,
    CashWallet,
)
from wander_ledger.models.constants import STORAGE_KEYS

from .preferences import PreferencesService
from .rates.conversion import Converter

logger = logging.getLogger("wander_ledger.cash")

_KEY = STORAGE_KEYS["cash_wallet"]


def _today() -> date:
    return datetime.now(timezone.utc).date()


def apply_to_balances(wallet: CashWallet, tx: CashTransactionIn, now: datetime) -> None:
    """Apply the balance deltas of one transaction to `wallet` in place."""

    def _bump(currency: str, delta: float) -> None:
        balance = wallet.balance_for(currency)
        if balance is None:
            wallet.balances.append(
                CashBalance(currency=currency, amount=delta, last_updated=now)
            )
            return
        balance.amount += delta
        balance.last_updated = now

    if tx.type == "exchange":
        _bump(tx.from_currency, -tx.from_amount)  # type: ignore[arg-type,operator]
        _bump(tx.to_currency, tx.to_amount)  # type: ignore[arg-type]
    elif tx.type == "spend":
        _bump(tx.currency, -tx.amount)
    else:
        _bump(tx.currency, tx.amount)


class CashWalletService:
    def __init__(
        self, store: JsonStore, preferences: PreferencesService, converter: Converter
    ):
        self._store = store
        self._preferences = preferences
        self._converter = converter

    def _empty_wallet(self) -> CashWallet:
        return CashWallet(home_currency=self._preferences.home_currency)

    def _recompute_total(self, wallet: CashWallet) -> None:
        home = self._preferences.home_currency
        policy = self._preferences.rounding_policy()
        total = 0.0
        for balance in wallet.balances:
            if balance.currency == home:
                total += balance.amount
                continue
            converted = self._converter.convert(balance.amount, balance.currency, home, policy)
            if converted is not None:
                total += converted.converted_amount
        wallet.total_in_home_currency = total
        wallet.home_currency = home

    async def get_wallet(self) -> CashWallet:
        try:
            stored = await self._store.read(_KEY)
        except StorageError:
            logger.exception("failed to load cash wallet")
            return self._empty_wallet()
        if not stored:
            return self._empty_wallet()
        try:
            return CashWallet.model_validate(stored)
        except ValidationError:
            logger.warning("stored cash wallet invalid; returning an empty wallet")
            return self._empty_wallet()

    async def get_balance(self, currency: str) -> float:
        balance = (await self.get_wallet()).balance_for(currency.upper())
        return balance.amount if balance else 0.0

    async def add_transaction(self, data: CashTransactionIn) -> CashTransaction:
        now = datetime.now(timezone.utc)
        tx = CashTransaction(
            **data.model_dump(), id=f"cash_{uuid.uuid4().hex[:12]}", created_at=now
        )

        def _apply(doc: Dict[str, Any]) -> None:
            wallet = CashWallet.model_validate(doc) if doc else self._empty_wallet()
            wallet.transactions.insert(0, tx)
            apply_to_balances(wallet, tx, now)
            self._recompute_total(wallet)
            doc.clear()
            doc.update(wallet.model_dump(mode="json"))

        await self._store.update(_KEY, _apply, default={})
        logger.info(
            "cash %s recorded", tx.type, extra={"currency": tx.currency}
        )
        return tx

    # Convenience helpers ------------------------------------------------
    async def withdraw_cash(
        self,
        currency: str,
        amount: float,
        description: str = "",
        fees: Optional[float] = None,
        location: Optional[str] = None,
    ) -> CashTransaction:
        return await self.add_transaction(
            CashTransactionIn(
                type="withdraw",
                currency=currency,
                amount=amount,
                description=description,
                fees=fees,
                fees_currency=currency,
                location=location,
                date=_today(),
            )
        )

    async def spend_cash(
        self,
        currency: str,
        amount: float,
        description: str = "",
        location: Optional[str] = None,
    ) -> CashTransaction:
        return await self.add_transaction(
            CashTransactionIn(
                type="spend",
                currency=currency,
                amount=amount,
                description=description,
                location=location,
                date=_today(),
            )
        )

    async def receive_cash(
        self, currency: str, amount: float, description: str = ""
    ) -> CashTransaction:
        return await self.add_transaction(
            CashTransactionIn(
                type="receive",
                currency=currency,
                amount=amount,
                description=description,
                date=_today(),
            )
        )

    async def adjust_cash(
        self, currency: str, amount: float, description: str = "Balance adjustment"
    ) -> CashTransaction:
        return await self.add_transaction(
            CashTransactionIn(
                type="adjustment",
                currency=currency,
                amount=amount,
                description=description,
                date=_today(),
            )
        )

    async def exchange_cash(
        self,
        from_currency: str,
        from_amount: float,
        to_currency: str,
        to_amount: float,
        fees: Optional[float] = None,
        location: Optional[str] = None,
    ) -> CashTransaction:
        from_currency, to_currency = from_currency.upper(), to_currency.upper()
        return await self.add_transaction(
            CashTransactionIn(
                type="exchange",
                currency=from_currency,
                amount=from_amount,
                description=f"Exchange {from_currency} to {to_currency}",
                from_currency=from_currency,
                from_amount=from_amount,
                to_currency=to_currency,
                to_amount=to_amount,
                exchange_rate=to_amount / from_amount if from_amount else None,
                fees=fees,
                fees_currency=from_currency,
                location=location,
                date=_today(),
            )
        )
