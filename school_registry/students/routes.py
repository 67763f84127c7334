"""FastAPI routes for students."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File
from sqlalchemy.orm import Session

from school_registry.auth import require_admin
from school_registry.db import get_db
from school_registry.students.service import StudentService
from school_registry.students.schemas import (
    PhotoUploadResponse,
    StudentCreate,
    StudentUpdate,
    StudentResponse,
    StudentListResponse,
)


router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=StudentListResponse)
def get_students(
    nisn: Optional[str] = Query(None, description="Cari berdasarkan NISN"),
    nama_lengkap: Optional[str] = Query(None, description="Cari berdasarkan nama"),
    limit: int = Query(50, ge=1, le=100, description="Jumlah data per halaman"),
    offset: int = Query(0, ge=0, description="Posisi awal halaman"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Daftar siswa dengan pencarian dan paginasi."""
    service = StudentService(db)
    students, total = service.get_students(
        nisn=nisn, nama_lengkap=nama_lengkap, limit=limit, offset=offset
    )

    return StudentListResponse(
        students=[StudentResponse.model_validate(s) for s in students],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=StudentResponse, status_code=201)
def create_student(
    student_data: StudentCreate,
    db: Session = Depends(get_db),
):
    """Formulir daftar ulang siswa (publik)."""
    service = StudentService(db)
    return service.create_student(student_data)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Ambil data siswa berdasarkan ID."""
    service = StudentService(db)
    student = service.get_student_by_id(student_id)

    if not student:
        raise HTTPException(status_code=404, detail="Siswa tidak ditemukan")

    return student


@router.patch("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: int,
    student_data: StudentUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Perbarui sebagian data siswa."""
    service = StudentService(db)
    return service.update_student(student_id, student_data)


@router.delete("/{student_id}", status_code=204)
def delete_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Hapus siswa beserta kartu dan akunnya."""
    service = StudentService(db)
    if not service.delete_student(student_id):
        raise HTTPException(status_code=404, detail="Siswa tidak ditemukan")
    return None


@router.post("/{student_id}/photo", response_model=PhotoUploadResponse)
async def upload_student_photo(
    student_id: int,
    file: UploadFile = File(..., description="Foto siswa (JPG/PNG)"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Unggah foto siswa."""
    service = StudentService(db)
    reference = await service.upload_student_photo(student_id, file)
    return PhotoUploadResponse(foto_siswa=reference)
