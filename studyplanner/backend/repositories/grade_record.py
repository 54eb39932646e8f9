"""
Grade Record Repository.

Owner-scoped; records are never updated after creation.
"""

from studyplanner.backend.models.grade_record import GradeRecord
from studyplanner.backend.repositories.base import OwnedRepository


class GradeRecordRepository(OwnedRepository[GradeRecord]):
    model = GradeRecord

    async def get_all_newest_first(self) -> list[GradeRecord]:
        return await self._all(self._select().order_by(GradeRecord.created_at.desc()))
