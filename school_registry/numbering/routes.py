"""FastAPI routes for number generation."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from school_registry.auth import require_admin
from school_registry.db import get_db
from school_registry.numbering.schemas import GeneratedNumberResponse, NumberSeries
from school_registry.numbering.service import IdentifierGenerator

router = APIRouter(prefix="/numbering", tags=["numbering"])


@router.get("/nis/next", response_model=GeneratedNumberResponse)
def next_student_number(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Reserve the next NIS of the current year."""
    value = IdentifierGenerator(db).reserve(NumberSeries.nis)
    return GeneratedNumberResponse(series=NumberSeries.nis, value=value)


@router.get("/cards/next", response_model=GeneratedNumberResponse)
def next_card_number(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Reserve the next card number of the current day."""
    value = IdentifierGenerator(db).reserve(NumberSeries.card)
    return GeneratedNumberResponse(series=NumberSeries.card, value=value)
