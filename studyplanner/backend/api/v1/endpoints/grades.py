"""
Grade Records API Endpoints.

The letter grade and grade points are derived on the server when a
record is created and never change afterwards. A client-supplied grade
is ignored.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from studyplanner.backend.core.dependencies import DbSession, OwnerId
from studyplanner.backend.schemas.base import ApiResponse
from studyplanner.backend.schemas.grade_record import (
    GpaResponse,
    GradeRecordCreate,
    GradeRecordResponse,
)
from studyplanner.backend.services.grade_record import GradeService

router = APIRouter()


def get_grade_service(db: DbSession, owner_id: OwnerId) -> GradeService:
    return GradeService(db, owner_id)


Grades = Annotated[GradeService, Depends(get_grade_service)]


@router.post("", response_model=ApiResponse[GradeRecordResponse], status_code=201, summary="Add a grade record")
async def create_grade_record(data: GradeRecordCreate, grades: Grades) -> ApiResponse[GradeRecordResponse]:
    record = await grades.create_record(data)
    return ApiResponse(data=GradeRecordResponse.model_validate(record))


@router.get("", response_model=ApiResponse[list[GradeRecordResponse]], summary="List grade records")
async def list_grade_records(grades: Grades) -> ApiResponse[list[GradeRecordResponse]]:
    records = await grades.list_records()
    return ApiResponse(data=[GradeRecordResponse.model_validate(record) for record in records])


@router.get(
    "/gpa",
    response_model=ApiResponse[GpaResponse],
    summary="Cumulative GPA",
    description="Credit-weighted mean of the stored grade points, two decimals.",
)
async def get_gpa(grades: Grades) -> ApiResponse[GpaResponse]:
    return ApiResponse(data=GpaResponse.model_validate(await grades.get_cumulative_gpa()))


@router.delete("/{record_id}", status_code=204, summary="Delete a grade record")
async def delete_grade_record(record_id: str, grades: Grades) -> None:
    await grades.delete_record(record_id)
