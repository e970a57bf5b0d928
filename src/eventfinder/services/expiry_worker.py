"""
Background worker for expiring stale pending bookings
"""
import asyncio
import logging
from typing import Optional

from eventfinder.core.config import settings
from eventfinder.services.booking_service import BookingService

logger = logging.getLogger(__name__)


class ExpiryWorker:
    """Periodically fails bookings left pending past their TTL"""

    def __init__(self, booking_service: BookingService, interval_seconds: Optional[float] = None):
        self.booking_service = booking_service
        self.interval = interval_seconds or settings.BOOKING_EXPIRY_CHECK_INTERVAL_SECONDS
        self.running = False
        self.task: Optional[asyncio.Task] = None

    async def start(self):
        """Start the background worker"""
        if self.running:
            logger.warning("⚠️  Expiry worker already running")
            return

        self.running = True
        self.task = asyncio.create_task(self._run())
        logger.info(f"✅ Expiry worker started (interval: {self.interval}s)")

    async def stop(self):
        """Stop the background worker"""
        if not self.running:
            return

        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
        logger.info("🛑 Expiry worker stopped")

    async def run_once(self) -> int:
        return await self.booking_service.expire_pending_bookings()

    async def _run(self):
        """Main worker loop"""
        while self.running:
            try:
                await self.run_once()
                await asyncio.sleep(self.interval)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"❌ Error in expiry worker: {e}")
                await asyncio.sleep(self.interval)
