"""
Sleep Repositories.

Reminders list in the order they fire during a day. Sessions list the
most recent night first.
"""

from studyplanner.backend.models.sleep import SleepReminder, SleepSession
from studyplanner.backend.repositories.base import OwnedRepository


class SleepReminderRepository(OwnedRepository[SleepReminder]):
    model = SleepReminder

    async def get_all_by_time(self) -> list[SleepReminder]:
        stmt = self._select().order_by(SleepReminder.reminder_time, SleepReminder.created_at)
        return await self._all(stmt)


class SleepSessionRepository(OwnedRepository[SleepSession]):
    model = SleepSession

    async def get_all_latest_first(self) -> list[SleepSession]:
        stmt = self._select().order_by(SleepSession.sleep_date.desc(), SleepSession.created_at.desc())
        return await self._all(stmt)
