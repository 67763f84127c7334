"""Pydantic schemas for student ID cards."""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from school_registry.students.schemas import StudentResponse


class StudentCardCreate(BaseModel):
    """Schema for issuing a card."""

    student_id: int = Field(..., description="ID siswa")
    masa_berlaku: date = Field(..., description="Masa berlaku kartu")


class StudentCardResponse(BaseModel):
    """Schema for card response."""

    id: int
    student_id: int
    card_number: str
    masa_berlaku: date
    qr_code_data: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentWithCardResponse(BaseModel):
    """A student paired with their active card, if any."""

    student: StudentResponse
    card: Optional[StudentCardResponse] = None
