"""SQLAlchemy models for student ID cards."""

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey

from school_registry.db import Base, utcnow


class StudentCard(Base):
    """Issued student ID card; the QR payload is the NISN at issuance time."""

    __tablename__ = "student_cards"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(
        Integer,
        ForeignKey("students.id"),
        nullable=False,
        index=True,
    )
    card_number = Column(String(40), unique=True, nullable=False, index=True)
    masa_berlaku = Column(Date, nullable=False)
    qr_code_data = Column(String(20), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
