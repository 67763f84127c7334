"""Business logic for student ID cards."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from school_registry.cards.models import StudentCard
from school_registry.cards.schemas import StudentCardCreate
from school_registry.errors import DuplicateKeyError, NotFoundError, StoreUnavailableError
from school_registry.metrics import STUDENT_CARDS_ISSUED
from school_registry.numbering.service import IdentifierGenerator
from school_registry.students.models import Student

logger = logging.getLogger(__name__)


class CardService:
    """Service class for card operations."""

    def __init__(self, db: Session, generator: Optional[IdentifierGenerator] = None):
        self.db = db
        self.generator = generator or IdentifierGenerator(db)

    def create_student_card(self, card_data: StudentCardCreate) -> StudentCard:
        """Issue a new active card for an existing student.

        Earlier active cards of the same student are left as they are.
        """
        student = self.db.get(Student, card_data.student_id)
        if not student:
            raise NotFoundError(f"Siswa dengan ID {card_data.student_id} tidak ditemukan")

        try:
            card = StudentCard(
                student_id=student.id,
                card_number=self.generator.next_card_number(),
                masa_berlaku=card_data.masa_berlaku,
                qr_code_data=student.nisn,
                is_active=True,
            )
            self.db.add(card)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateKeyError("Nomor kartu sudah dipakai") from e
        except OperationalError as e:
            self.db.rollback()
            raise StoreUnavailableError("Basis data tidak dapat dihubungi") from e
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(card)
        STUDENT_CARDS_ISSUED.inc()
        logger.info("Card %s issued for student %s", card.card_number, card.student_id)
        return card

    def get_active_card(self, student_id: int) -> Optional[StudentCard]:
        """Most recently issued active card (highest id), or None."""
        if not self.db.get(Student, student_id):
            return None
        return (
            self.db.query(StudentCard)
            .filter(StudentCard.student_id == student_id, StudentCard.is_active.is_(True))
            .order_by(StudentCard.id.desc())
            .first()
        )

    def get_student_with_card(self, student_id: int) -> Optional[Dict[str, Any]]:
        """Get the student and their active card; None only if the student is missing."""
        student = self.db.get(Student, student_id)
        if not student:
            return None
        return {"student": student, "card": self.get_active_card(student_id)}
