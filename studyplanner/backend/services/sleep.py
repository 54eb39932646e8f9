"""
Sleep Service.

Bedtime reminders and logged sleep sessions for one owner. Both are
create, list and delete only.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.models.sleep import SleepReminder, SleepSession
from studyplanner.backend.repositories.sleep import SleepReminderRepository, SleepSessionRepository
from studyplanner.backend.schemas.sleep import SleepReminderCreate, SleepSessionCreate
from studyplanner.backend.services.base import OwnedService


class SleepService(OwnedService):
    def __init__(self, session: AsyncSession, owner_id: str | None) -> None:
        super().__init__(session, owner_id)
        self.reminder_repo = SleepReminderRepository(session, self.owner_id)
        self.session_repo = SleepSessionRepository(session, self.owner_id)

    async def create_reminder(self, data: SleepReminderCreate) -> SleepReminder:
        """
        Raises:
            ValidationError: If name or reminder_time is blank
        """
        self._validate_required(data.model_dump(), ["name", "reminder_time"])
        self._log_operation("Creating sleep reminder", reminder_time=data.reminder_time.isoformat())

        return await self._execute_db_operation(
            "create_sleep_reminder",
            self.reminder_repo.create(name=data.name, reminder_time=data.reminder_time),
        )

    async def list_reminders(self) -> list[SleepReminder]:
        """Earliest time of day first."""
        return await self.reminder_repo.get_all_by_time()

    async def delete_reminder(self, reminder_id: str) -> None:
        self._log_operation("Deleting sleep reminder", reminder_id=reminder_id)
        await self._execute_db_operation(
            "delete_sleep_reminder",
            self.reminder_repo.delete(reminder_id),
        )

    async def log_session(self, data: SleepSessionCreate) -> SleepSession:
        """
        Record one night of sleep.

        Raises:
            ValidationError: If any of the date, the two times or the duration is blank
        """
        values = data.model_dump()
        self._validate_required(values, ["sleep_date", "bed_time", "wakeup_time", "duration_str"])
        self._log_operation("Logging sleep session", sleep_date=data.sleep_date.isoformat())

        return await self._execute_db_operation(
            "create_sleep_session",
            self.session_repo.create(**values),
        )

    async def list_sessions(self) -> list[SleepSession]:
        """Most recent night first."""
        return await self.session_repo.get_all_latest_first()

    async def delete_session(self, session_id: str) -> None:
        self._log_operation("Deleting sleep session", session_id=session_id)
        await self._execute_db_operation(
            "delete_sleep_session",
            self.session_repo.delete(session_id),
        )
