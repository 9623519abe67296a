import asyncio
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

IST = timezone(timedelta(hours=5, minutes=30))


class SyncMonitor:
    """Cosmetic online/sync indicator. No data leaves the process."""

    def __init__(self, adapter, last_sync_key: str, online: bool = True, delay: float = 1.5):
        self.adapter = adapter
        self.last_sync_key = last_sync_key
        self.online = online
        self.delay = delay
        self.syncing = False
        self.last_synced: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    async def load(self):
        self.last_synced = await self.adapter.load(self.last_sync_key, None)

    def trigger(self) -> bool:
        if not self.online or self.syncing:
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False
        self.syncing = True
        self._task = loop.create_task(self._finish())
        return True

    async def _finish(self):
        try:
            await asyncio.sleep(self.delay)
            self.last_synced = datetime.now(IST).isoformat()
            await self.adapter.save(self.last_sync_key, self.last_synced)
        finally:
            self.syncing = False

    def status(self) -> dict:
        return {"online": self.online, "syncing": self.syncing, "last_synced": self.last_synced}
