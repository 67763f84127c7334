"""Shared pytest fixtures: a throwaway SQLite database per test."""

from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from school_registry.auth import create_access_token
from school_registry.cards.models import StudentCard
from school_registry.cards.service import CardService
from school_registry.db import SessionLocal, build_engine, create_tables, get_db
from school_registry.main import app
from school_registry.numbering.service import IdentifierGenerator
from school_registry.students.models import Student
from school_registry.students.service import StudentService

WIB = timezone(timedelta(hours=7))
FIXED_NOW = datetime(2026, 10, 18, 9, 30, tzinfo=WIB)


def student_payload(**overrides) -> dict:
    """Valid re-registration form data."""
    data = {
        "nisn": "1234567890",
        "nama_lengkap": "Budi Santoso",
        "jenis_kelamin": "LAKI_LAKI",
        "tempat_lahir": "Jakarta",
        "tanggal_lahir": "2010-01-15",
        "alamat_jalan": "Jl. Merdeka No. 1",
        "alamat_dusun": None,
        "alamat_desa": "Sukamaju",
        "alamat_kecamatan": "Cibinong",
        "nomor_hp": "081234567890",
        "agama": "ISLAM",
        "jumlah_saudara": 2,
        "anak_ke": 1,
        "tinggal_bersama": "ORANG_TUA",
        "asal_sekolah": "SD Negeri 1",
        "foto_siswa": None,
    }
    data.update(overrides)
    return data


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'registry.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = SessionLocal(bind=engine)
    yield session
    session.close()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def generator(db, clock):
    return IdentifierGenerator(db, clock=clock)


@pytest.fixture
def student_service(db, generator):
    return StudentService(db, generator=generator)


@pytest.fixture
def card_service(db, generator):
    return CardService(db, generator=generator)


@pytest.fixture
def make_student(db):
    """Insert a student row directly, bypassing NIS generation."""
    counter = {"n": 0}

    def _make(nisn=None, nis=None, **overrides):
        counter["n"] += 1
        fields = student_payload(**overrides)
        fields["nisn"] = nisn or f"{9000000000 + counter['n']}"
        fields["tanggal_lahir"] = date.fromisoformat(fields["tanggal_lahir"])
        student = Student(nis=nis, **fields)
        db.add(student)
        db.commit()
        return student

    return _make


@pytest.fixture
def make_card(db):
    """Insert a card row directly, bypassing card-number generation."""

    def _make(student, card_number, is_active=True, masa_berlaku=date(2027, 6, 30)):
        card = StudentCard(
            student_id=student.id,
            card_number=card_number,
            masa_berlaku=masa_berlaku,
            qr_code_data=student.nisn,
            is_active=is_active,
        )
        db.add(card)
        db.commit()
        return card

    return _make


@pytest.fixture
def client(engine):
    """API client whose requests each get their own session on the test database."""

    def override_get_db():
        session = SessionLocal(bind=engine)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "admin", "role": "ADMIN"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers():
    token = create_access_token({"sub": "1234567890", "role": "SISWA"})
    return {"Authorization": f"Bearer {token}"}
