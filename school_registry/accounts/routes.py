"""FastAPI routes for login and account management."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from school_registry.accounts.schemas import (
    AccountCreate,
    AccountResponse,
    LoginRequest,
    LoginResponse,
)
from school_registry.accounts.service import AccountService
from school_registry.auth import create_access_token, require_admin
from school_registry.db import get_db

router = APIRouter(tags=["accounts"])


@router.post("/auth/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate an account and return a JWT token."""
    account = AccountService(db).authenticate(request.username, request.password)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Nama pengguna atau kata sandi salah",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_access_token(data={"sub": account.username, "role": account.role})
    return LoginResponse(access_token=access_token, role=account.role)


@router.post("/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    account_data: AccountCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """Buat akun baru (admin)."""
    return AccountService(db).create_account(account_data)
