"""
Grade Record Service.

Creates grade records with their letter grade and grade points frozen at
creation time, lists and deletes them, and computes the owner's
cumulative GPA.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.exceptions import ValidationError
from studyplanner.backend.models.grade_record import GradeRecord
from studyplanner.backend.repositories.grade_record import GradeRecordRepository
from studyplanner.backend.schemas.grade_record import GradeRecordCreate
from studyplanner.backend.services.base import OwnedService
from studyplanner.backend.services.grading import GpaSummary, cumulative_gpa, grade_band


class GradeService(OwnedService):
    """Service for grade records and GPA."""

    def __init__(self, session: AsyncSession, owner_id: str | None) -> None:
        super().__init__(session, owner_id)
        self.repo = GradeRecordRepository(session, self.owner_id)

    async def create_record(self, data: GradeRecordCreate) -> GradeRecord:
        """
        Create a grade record.

        The score is graded once here; later changes to the grading
        table do not touch stored records.

        Raises:
            ValidationError: If course is blank or credit hours are not positive
        """
        self._validate_required(data.model_dump(), ["course", "score", "credit_hours"])
        if data.credit_hours <= 0:
            raise ValidationError(
                "Credit hours must be positive",
                details={"credit_hours": data.credit_hours},
            )

        band = grade_band(data.score)
        self._log_operation(
            "Creating grade record",
            course=data.course,
            grade=band.letter,
        )

        return await self._execute_db_operation(
            "create_grade_record",
            self.repo.create(
                course=data.course,
                score=data.score,
                credit_hours=data.credit_hours,
                grade=band.letter,
                gpa=band.points,
            ),
        )

    async def list_records(self) -> list[GradeRecord]:
        """All of the owner's records, newest first."""
        return await self.repo.get_all_newest_first()

    async def delete_record(self, record_id: str) -> None:
        """
        Hard delete a record.

        Raises:
            NotFoundError: If record not found or owned by someone else
        """
        self._log_operation("Deleting grade record", record_id=record_id)

        await self._execute_db_operation(
            "delete_grade_record",
            self.repo.delete(record_id),
        )

    async def get_cumulative_gpa(self) -> GpaSummary:
        """Credit-weighted GPA over whatever records exist right now."""
        records = await self.repo.get_all()
        summary = cumulative_gpa(records)
        self._log_debug(
            "Computed cumulative GPA",
            records=len(records),
            gpa=summary.gpa,
            credit_total=summary.credit_total,
        )
        return summary
