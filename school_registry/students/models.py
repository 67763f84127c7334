"""SQLAlchemy models for students."""

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey

from school_registry.db import Base, utcnow


class Student(Base):
    """Student filled in through the re-registration form."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    nisn = Column(String(10), unique=True, nullable=False, index=True)
    nis = Column(String(20), unique=True, nullable=True, index=True)
    nama_lengkap = Column(String(150), nullable=False)
    jenis_kelamin = Column(String(10), nullable=False)
    tempat_lahir = Column(String(100), nullable=False)
    tanggal_lahir = Column(Date, nullable=False)
    alamat_jalan = Column(String(255), nullable=False)
    alamat_dusun = Column(String(100), nullable=True)
    alamat_desa = Column(String(100), nullable=False)
    alamat_kecamatan = Column(String(100), nullable=False)
    nomor_hp = Column(String(20), nullable=False)
    agama = Column(String(10), nullable=False)
    jumlah_saudara = Column(Integer, nullable=False)
    anak_ke = Column(Integer, nullable=False)
    tinggal_bersama = Column(String(10), nullable=False)
    asal_sekolah = Column(String(150), nullable=False)
    foto_siswa = Column(String(255), nullable=True)
    account_id = Column(
        Integer, ForeignKey("accounts.id"), unique=True, nullable=True, index=True
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
