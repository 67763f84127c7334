"""FastAPI routes for student ID cards."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from school_registry.auth import require_admin
from school_registry.cards.schemas import (
    StudentCardCreate,
    StudentCardResponse,
    StudentWithCardResponse,
)
from school_registry.cards.service import CardService
from school_registry.db import get_db
from school_registry.students.schemas import StudentResponse

router = APIRouter(tags=["cards"])


@router.post("/cards", response_model=StudentCardResponse, status_code=201)
def create_student_card(
    card_data: StudentCardCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Terbitkan kartu pelajar baru."""
    return CardService(db).create_student_card(card_data)


@router.get("/students/{student_id}/card", response_model=Optional[StudentCardResponse])
def get_active_card(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Kartu aktif siswa; null jika siswa belum punya kartu aktif."""
    service = CardService(db)
    result = service.get_student_with_card(student_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Siswa tidak ditemukan")
    return result["card"]


@router.get("/students/{student_id}/with-card", response_model=StudentWithCardResponse)
def get_student_with_card(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Data siswa beserta kartu aktifnya."""
    result = CardService(db).get_student_with_card(student_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Siswa tidak ditemukan")

    card = result["card"]
    return StudentWithCardResponse(
        student=StudentResponse.model_validate(result["student"]),
        card=StudentCardResponse.model_validate(card) if card else None,
    )
