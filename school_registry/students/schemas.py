"""Pydantic schemas for students."""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TEXT_FIELDS = (
    "nama_lengkap",
    "tempat_lahir",
    "alamat_jalan",
    "alamat_desa",
    "alamat_kecamatan",
    "asal_sekolah",
)


class Gender(str, Enum):
    """Jenis kelamin."""

    LAKI_LAKI = "LAKI_LAKI"
    PEREMPUAN = "PEREMPUAN"


class Religion(str, Enum):
    """Agama."""

    ISLAM = "ISLAM"
    KRISTEN = "KRISTEN"
    KATOLIK = "KATOLIK"
    HINDU = "HINDU"
    BUDDHA = "BUDDHA"
    KONGHUCU = "KONGHUCU"


class LivingWith(str, Enum):
    """Tinggal bersama."""

    ORANG_TUA = "ORANG_TUA"
    WALI = "WALI"
    ASRAMA = "ASRAMA"
    KOST = "KOST"
    LAINNYA = "LAINNYA"


def _clean_text(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Kolom ini tidak boleh kosong")
    return v


class StudentBase(BaseModel):
    """Base schema for student data."""

    nisn: str = Field(..., pattern=r"^[0-9]{10}$", description="Nomor Induk Siswa Nasional")
    nama_lengkap: str = Field(..., min_length=1, max_length=150, description="Nama lengkap")
    jenis_kelamin: Gender
    tempat_lahir: str = Field(..., min_length=1, max_length=100)
    tanggal_lahir: date
    alamat_jalan: str = Field(..., min_length=1, max_length=255)
    alamat_dusun: Optional[str] = Field(None, max_length=100)
    alamat_desa: str = Field(..., min_length=1, max_length=100)
    alamat_kecamatan: str = Field(..., min_length=1, max_length=100)
    nomor_hp: str = Field(..., min_length=10, max_length=20, description="Nomor HP")
    agama: Religion
    jumlah_saudara: int = Field(..., ge=0, description="Jumlah saudara")
    anak_ke: int = Field(..., ge=1, description="Anak ke-")
    tinggal_bersama: LivingWith
    asal_sekolah: str = Field(..., min_length=1, max_length=150)
    foto_siswa: Optional[str] = Field(None, max_length=255)

    @field_validator("nisn", mode="before")
    @classmethod
    def strip_nisn(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def validate_text(cls, v):
        """Trim whitespace; whitespace-only values are rejected."""
        return _clean_text(v)


class StudentCreate(StudentBase):
    """Schema for the re-registration form."""

    pass


class StudentUpdate(BaseModel):
    """Partial update: only the fields that are sent are applied.

    A field sent as ``null`` means "set to null", which the service accepts
    only for nullable columns.
    """

    nisn: Optional[str] = Field(None, pattern=r"^[0-9]{10}$")
    nama_lengkap: Optional[str] = Field(None, min_length=1, max_length=150)
    jenis_kelamin: Optional[Gender] = None
    tempat_lahir: Optional[str] = Field(None, min_length=1, max_length=100)
    tanggal_lahir: Optional[date] = None
    alamat_jalan: Optional[str] = Field(None, min_length=1, max_length=255)
    alamat_dusun: Optional[str] = Field(None, max_length=100)
    alamat_desa: Optional[str] = Field(None, min_length=1, max_length=100)
    alamat_kecamatan: Optional[str] = Field(None, min_length=1, max_length=100)
    nomor_hp: Optional[str] = Field(None, min_length=10, max_length=20)
    agama: Optional[Religion] = None
    jumlah_saudara: Optional[int] = Field(None, ge=0)
    anak_ke: Optional[int] = Field(None, ge=1)
    tinggal_bersama: Optional[LivingWith] = None
    asal_sekolah: Optional[str] = Field(None, min_length=1, max_length=150)
    foto_siswa: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(extra="forbid")

    @field_validator("nisn", mode="before")
    @classmethod
    def strip_nisn(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def validate_text(cls, v):
        return _clean_text(v)


class StudentResponse(StudentBase):
    """Schema for student response."""

    id: int
    nis: Optional[str] = None
    account_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentListResponse(BaseModel):
    """Schema for paginated student list response."""

    students: List[StudentResponse]
    total: int
    limit: int
    offset: int


class PhotoUploadResponse(BaseModel):
    """Stored photo reference."""

    foto_siswa: str
