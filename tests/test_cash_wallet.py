"""Cash wallet balances, transactions and home total."""

from datetime import date

import pytest

from wander_ledger.models.cash import CashTransactionIn


async def test_withdraw_then_spend(service):
    await service.withdraw_cash("EUR", 200, "ATM")
    await service.spend_cash("EUR", 50, "Market")

    assert await service.get_cash_balance("EUR") == 150
    wallet = await service.get_cash_wallet()
    assert wallet.home_currency == "USD"
    assert wallet.total_in_home_currency == pytest.approx(162.0)
    assert [t.type for t in wallet.transactions] == ["spend", "withdraw"]


async def test_exchange_moves_both_legs(service):
    await service.withdraw_cash("USD", 300, "ATM")
    tx = await service.exchange_cash("USD", 100, "EUR", 90, fees=2.5)

    assert tx.type == "exchange"
    assert tx.currency == "USD"
    assert tx.amount == 100
    assert tx.exchange_rate == pytest.approx(0.9)
    assert tx.description == "Exchange USD to EUR"
    assert tx.fees == 2.5
    assert tx.fees_currency == "USD"
    assert await service.get_cash_balance("USD") == 200
    assert await service.get_cash_balance("EUR") == 90

    wallet = await service.get_cash_wallet()
    assert wallet.total_in_home_currency == pytest.approx(200 + 90 * 1.08)


async def test_fees_are_not_deducted(service):
    await service.withdraw_cash("USD", 100, "ATM", fees=5)
    assert await service.get_cash_balance("USD") == 100


async def test_balances_may_go_negative(service):
    await service.spend_cash("THB", 500, "Taxi")
    assert await service.get_cash_balance("THB") == -500


async def test_absent_balance_is_zero(service):
    assert await service.get_cash_balance("GBP") == 0
    wallet = await service.get_cash_wallet()
    assert wallet.balances == []
    assert wallet.total_in_home_currency == 0


async def test_unconvertible_balance_counts_zero(service):
    await service.withdraw_cash("INR", 1000, "ATM")
    await service.withdraw_cash("USD", 10, "ATM")
    wallet = await service.get_cash_wallet()
    assert wallet.total_in_home_currency == pytest.approx(10.0)


async def test_receive_and_adjust(service):
    await service.cash.receive_cash("EUR", 40, "Refund")
    await service.cash.adjust_cash("EUR", -5)
    assert await service.get_cash_balance("EUR") == 35


async def test_generic_transaction_and_balance_row_reuse(service):
    tx = await service.add_cash_transaction(
        CashTransactionIn(type="withdraw", currency="JPY", amount=10000, date=date(2024, 3, 1), location="Shinjuku")
    )
    assert tx.id.startswith("cash_")
    await service.spend_cash("JPY", 1500, "Ramen")
    wallet = await service.get_cash_wallet()
    assert len(wallet.balances) == 1
    assert wallet.balance_for("JPY").amount == 8500
    assert wallet.transactions[-1].location == "Shinjuku"


def test_exchange_requires_legs():
    with pytest.raises(ValueError):
        CashTransactionIn(type="exchange", currency="USD", amount=10, date=date(2024, 3, 1))
