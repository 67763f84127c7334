"""Business logic for students: registry operations and cascading deletion."""

import logging
import secrets
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from school_registry.accounts.models import Account
from school_registry.cards.models import StudentCard
from school_registry.db import utcnow
from school_registry.errors import (
    DuplicateKeyError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
)
from school_registry.metrics import STUDENTS_DELETED, STUDENTS_REGISTERED
from school_registry.numbering.service import IdentifierGenerator
from school_registry.settings import settings
from school_registry.students.models import Student
from school_registry.students.schemas import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"alamat_dusun", "foto_siswa"}
ALLOWED_PHOTO_EXTENSIONS = {".jpg", ".jpeg", ".png"}
PHOTO_URL_PREFIX = "/uploads/photos/"


class StudentService:
    """Service class for student operations."""

    def __init__(self, db: Session, generator: Optional[IdentifierGenerator] = None):
        self.db = db
        self.generator = generator or IdentifierGenerator(db)

    def get_students(
        self,
        nisn: Optional[str] = None,
        nama_lengkap: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Student], int]:
        """Get students by case-insensitive NISN/name substring, ordered by id."""
        query = self.db.query(Student)
        if nisn:
            query = query.filter(func.lower(Student.nisn).contains(nisn.lower(), autoescape=True))
        if nama_lengkap:
            query = query.filter(
                func.lower(Student.nama_lengkap).contains(nama_lengkap.lower(), autoescape=True)
            )

        total = query.count()
        students = query.order_by(Student.id).limit(limit).offset(offset).all()
        return students, total

    def get_student_by_id(self, student_id: int) -> Optional[Student]:
        return self.db.get(Student, student_id)

    def get_student_by_nisn(self, nisn: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.nisn == nisn).first()

    def create_student(self, student_data: StudentCreate) -> Student:
        """Register a student and assign the next NIS of the year."""
        if self.get_student_by_nisn(student_data.nisn):
            raise DuplicateKeyError(f"Siswa dengan NISN '{student_data.nisn}' sudah terdaftar")

        try:
            nis = self.generator.next_student_number()
            values = student_data.model_dump(mode="json")
            values["tanggal_lahir"] = student_data.tanggal_lahir
            student = Student(nis=nis, **values)
            self.db.add(student)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateKeyError(
                f"Siswa dengan NISN '{student_data.nisn}' sudah terdaftar"
            ) from e
        except OperationalError as e:
            self.db.rollback()
            raise StoreUnavailableError("Basis data tidak dapat dihubungi") from e
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(student)
        STUDENTS_REGISTERED.inc()
        logger.info("Student %s registered with NIS %s", student.nisn, student.nis)
        return student

    def update_student(self, student_id: int, student_data: StudentUpdate) -> Student:
        """Apply the fields present in ``student_data``; others keep their value."""
        student = self.get_student_by_id(student_id)
        if not student:
            raise NotFoundError("Siswa tidak ditemukan")

        changes = student_data.model_dump(mode="json", exclude_unset=True)
        if changes.get("tanggal_lahir") is not None:
            changes["tanggal_lahir"] = student_data.tanggal_lahir
        for field, value in changes.items():
            if value is None and field not in NULLABLE_FIELDS:
                raise InvalidInputError(f"Kolom '{field}' tidak boleh null")

        new_nisn = changes.get("nisn")
        if new_nisn and new_nisn != student.nisn and self.get_student_by_nisn(new_nisn):
            raise DuplicateKeyError(f"Siswa dengan NISN '{new_nisn}' sudah terdaftar")

        for field, value in changes.items():
            setattr(student, field, value)

        # strictly later than the previous stamp, even within one clock tick
        now = utcnow()
        if student.updated_at is not None and now <= student.updated_at:
            now = student.updated_at + timedelta(microseconds=1)
        student.updated_at = now

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateKeyError("NISN sudah dipakai siswa lain") from e
        except OperationalError as e:
            self.db.rollback()
            raise StoreUnavailableError("Basis data tidak dapat dihubungi") from e

        self.db.refresh(student)
        logger.info("Student %s updated: %s", student_id, ", ".join(sorted(changes)) or "-")
        return student

    def delete_student(self, student_id: int) -> bool:
        """
        Delete a student together with their cards and linked account.

        Cards go first (they reference the student), then the student, then
        the account the student pointed at. All three happen in one
        transaction; any failure rolls back the whole unit.
        Returns False, touching nothing, when the student does not exist.
        """
        student = self.get_student_by_id(student_id)
        if not student:
            return False

        account_id = student.account_id
        try:
            cards_deleted = self._delete_cards(student_id)
            deleted = self.db.query(Student).filter(Student.id == student_id).delete()
            if account_id is not None:
                self._delete_account(account_id)
            self.db.commit()
        except OperationalError as e:
            self.db.rollback()
            logger.error("Deletion of student %s rolled back: %s", student_id, e)
            raise StoreUnavailableError("Basis data tidak dapat dihubungi") from e
        except Exception:
            self.db.rollback()
            logger.error("Deletion of student %s rolled back", student_id)
            raise

        STUDENTS_DELETED.inc()
        logger.info(
            "Student %s deleted with %d card(s)%s",
            student_id,
            cards_deleted,
            f" and account {account_id}" if account_id is not None else "",
        )
        return deleted == 1

    def _delete_cards(self, student_id: int) -> int:
        return self.db.query(StudentCard).filter(StudentCard.student_id == student_id).delete()

    def _delete_account(self, account_id: int) -> int:
        return self.db.query(Account).filter(Account.id == account_id).delete()

    async def upload_student_photo(self, student_id: int, upload_file: UploadFile) -> str:
        """
        Store a JPG/PNG photo for the student and record its reference.
        - Raises NotFoundError for an unknown student
        - Raises InvalidInputError for a bad extension, empty or oversized file
        - Returns the stored reference ``/uploads/photos/<file>``
        """
        student = self.get_student_by_id(student_id)
        if not student:
            raise NotFoundError("Siswa tidak ditemukan")

        filename = str(upload_file.filename or "")
        extension = Path(filename).suffix.lower()
        if extension not in ALLOWED_PHOTO_EXTENSIONS:
            raise InvalidInputError("Format file tidak valid. Hanya JPG dan PNG yang diizinkan")

        content = await upload_file.read(settings.max_photo_size_bytes + 1)
        if not content:
            raise InvalidInputError("File foto kosong")
        if len(content) > settings.max_photo_size_bytes:
            raise InvalidInputError("Ukuran file foto melebihi batas")

        previous = self._stored_photo_path(student.foto_siswa)
        photo_dir = Path(settings.upload_dir) / "photos"
        photo_dir.mkdir(parents=True, exist_ok=True)
        stored_name = f"student_{student_id}_{secrets.token_hex(16)}{extension}"
        stored_path = photo_dir / stored_name
        stored_path.write_bytes(content)

        reference = f"{PHOTO_URL_PREFIX}{stored_name}"
        try:
            self.update_student(student_id, StudentUpdate(foto_siswa=reference))
        except Exception:
            stored_path.unlink(missing_ok=True)
            raise

        if previous is not None:
            previous.unlink(missing_ok=True)
        logger.info("Photo stored for student %s at %s", student_id, reference)
        return reference

    @staticmethod
    def _stored_photo_path(reference: Optional[str]) -> Optional[Path]:
        """File behind a reference this service wrote, or None for anything else."""
        if not reference or not reference.startswith(PHOTO_URL_PREFIX):
            return None
        name = reference[len(PHOTO_URL_PREFIX):]
        if not name or name != Path(name).name:
            return None
        return Path(settings.upload_dir) / "photos" / name
