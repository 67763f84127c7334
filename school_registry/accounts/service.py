"""Business logic for login accounts."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from school_registry.accounts.models import Account
from school_registry.accounts.schemas import AccountCreate, UserRole
from school_registry.auth import hash_password, verify_password
from school_registry.errors import DuplicateKeyError, StoreUnavailableError
from school_registry.settings import settings

logger = logging.getLogger(__name__)


class AccountService:
    """Service class for account operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_account_by_username(self, username: str) -> Optional[Account]:
        return self.db.query(Account).filter(Account.username == username).first()

    def create_account(self, account_data: AccountCreate) -> Account:
        """Create an account with a bcrypt-hashed password."""
        if self.get_account_by_username(account_data.username):
            raise DuplicateKeyError(
                f"Akun dengan nama pengguna '{account_data.username}' sudah ada"
            )

        account = Account(
            username=account_data.username,
            password_hash=hash_password(account_data.password),
            role=account_data.role.value,
        )
        try:
            self.db.add(account)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateKeyError(
                f"Akun dengan nama pengguna '{account_data.username}' sudah ada"
            ) from e
        except OperationalError as e:
            self.db.rollback()
            raise StoreUnavailableError("Basis data tidak dapat dihubungi") from e

        self.db.refresh(account)
        logger.info("Account %s created with role %s", account.username, account.role)
        return account

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        """Return the account when the credentials match, else None."""
        account = self.get_account_by_username(username)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("Failed login for %s", username)
            return None
        return account

    def ensure_admin_account(self) -> Account:
        """Create the bootstrap admin from settings when it does not exist yet."""
        existing = self.get_account_by_username(settings.admin_user)
        if existing:
            return existing

        logger.info("Bootstrapping admin account %s", settings.admin_user)
        return self.create_account(
            AccountCreate(
                username=settings.admin_user,
                password=settings.admin_pass,
                role=UserRole.ADMIN,
            )
        )
