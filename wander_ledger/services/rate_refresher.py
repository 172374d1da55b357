"""Periodic exchange-rate refresh.

Runs `RateTable.fetch_latest_rates` on a fixed interval in a background task.
Each tick replaces the whole table; a failed tick is logged and the next one
proceeds on schedule.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional

from .rates.rate_table import RateTable

logger = logging.getLogger("wander_ledger.rates.refresher")


class RateRefresher:
    def __init__(self, table: RateTable, interval_seconds: float, base_currency: str = "USD"):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._table = table
        self._interval = interval_seconds
        self._base = base_currency
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("rate refresher started (every %ss)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("rate refresher stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                ok = await self._table.fetch_latest_rates(self._base)
            except Exception:
                logger.exception("rate source failed during scheduled refresh")
                continue
            if not ok:
                logger.warning("scheduled rate refresh failed; keeping previous table")
