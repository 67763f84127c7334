"""Sequential identifier generation for student numbers (NIS) and card numbers.

Both series are partitioned: NIS by calendar year (``2026`` + ``0001``) and
card numbers by calendar day (``CARD-20261018-001``). The next value of a
partition is one more than the highest value seen so far, where "seen" is
the larger of:

* the highest numeric suffix among stored identifiers with the partition
  prefix (identifiers with a non-numeric suffix are ignored), and
* the partition's row in ``sequence_counters``.

The counter row is bumped with a single ``UPDATE ... RETURNING`` so two
transactions allocating in the same partition are serialized by the row
lock and can never receive the same value. Gaps are never filled, and a
number that is allocated but not persisted leaves a gap.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from school_registry.cards.models import StudentCard
from school_registry.errors import StoreUnavailableError
from school_registry.metrics import IDENTIFIERS_GENERATED
from school_registry.numbering.schemas import NumberSeries
from school_registry.settings import settings
from school_registry.students.models import Student

logger = logging.getLogger(__name__)

NIS_MIN_WIDTH = 4
CARD_MIN_WIDTH = 3
CARD_PREFIX = "CARD-"


def school_clock() -> datetime:
    """Current time in the school's local offset."""
    return datetime.now(timezone(timedelta(hours=settings.numbering_utc_offset_hours)))


def parse_sequence(identifier: Optional[str], prefix: str) -> Optional[int]:
    """Return the numeric suffix after ``prefix``, or None if there is none."""
    if not identifier or not identifier.startswith(prefix):
        return None
    suffix = identifier[len(prefix):]
    if not suffix or not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


def format_student_number(year: str, sequence: int) -> str:
    return f"{year}{sequence:0{NIS_MIN_WIDTH}d}"


def format_card_number(day: str, sequence: int) -> str:
    return f"{CARD_PREFIX}{day}-{sequence:0{CARD_MIN_WIDTH}d}"


class IdentifierGenerator:
    """Allocates NIS and card numbers inside the caller's transaction.

    The caller owns the transaction: the counter bump only becomes visible
    (and releases its row lock) when the caller commits or rolls back.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.clock = clock or school_clock

    def next_student_number(self) -> str:
        year = self.clock().strftime("%Y")
        sequence = self._allocate(NumberSeries.nis, year, Student.nis, year)
        return format_student_number(year, sequence)

    def next_card_number(self) -> str:
        day = self.clock().strftime("%Y%m%d")
        prefix = f"{CARD_PREFIX}{day}-"
        sequence = self._allocate(NumberSeries.card, day, StudentCard.card_number, prefix)
        return format_card_number(day, sequence)

    def reserve(self, series: NumberSeries) -> str:
        """Allocate one number of ``series`` and commit the reservation."""
        try:
            if series == NumberSeries.nis:
                value = self.next_student_number()
            else:
                value = self.next_card_number()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return value

    def _highest_existing(self, column, prefix: str) -> int:
        rows = self.db.query(column).filter(column.isnot(None), column.like(f"{prefix}%")).all()
        highest = 0
        for (identifier,) in rows:
            sequence = parse_sequence(identifier, prefix)
            if sequence is not None:
                highest = max(highest, sequence)
        return highest

    def _allocate(self, series: NumberSeries, partition_key: str, column, prefix: str) -> int:
        try:
            floor = self._highest_existing(column, prefix)
            self.db.execute(
                text(
                    """
                    INSERT INTO sequence_counters (series, partition_key, last_value)
                    VALUES (:series, :partition_key, 0)
                    ON CONFLICT (series, partition_key) DO NOTHING
                    """
                ),
                {"series": series.value, "partition_key": partition_key},
            )
            row = self.db.execute(
                text(
                    """
                    UPDATE sequence_counters
                       SET last_value = CASE WHEN last_value > :floor
                                             THEN last_value + 1
                                             ELSE :floor + 1 END
                     WHERE series = :series AND partition_key = :partition_key
                    RETURNING last_value
                    """
                ),
                {"series": series.value, "partition_key": partition_key, "floor": floor},
            ).fetchone()
        except OperationalError as e:
            raise StoreUnavailableError("Basis data tidak dapat dihubungi") from e

        IDENTIFIERS_GENERATED.labels(series=series.value).inc()
        logger.info("Allocated %s #%d in partition %s", series.value, row.last_value, partition_key)
        return row.last_value
