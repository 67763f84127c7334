"""SQLAlchemy models for numbering series."""

from sqlalchemy import Column, Integer, String

from school_registry.db import Base


class SequenceCounter(Base):
    """Last value handed out in one partition of a numbering series."""

    __tablename__ = "sequence_counters"

    series = Column(String(20), primary_key=True)
    partition_key = Column(String(20), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
