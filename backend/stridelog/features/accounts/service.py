"""
Account Service

Registration, authentication and profile edits.

Unknown usernames and wrong passwords produce the same AuthError so callers
cannot probe which usernames exist.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.shared.errors import AuthError, StorageError, UsernameTakenError
from .passwords import dummy_hash, hash_password, verify_password
from .repository import AccountRepository
from .schemas import AccountProfile
from .validators import (
    validate_confirmation,
    validate_gender,
    validate_password,
    validate_username,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


@dataclass
class AccountContext:
    """
    Logged-in account.

    Created by `AccountService.login()`; `logout()` ends it. Operations that
    act on behalf of a user take the context instead of reading global state.
    """
    account_id: int
    username: str
    logged_in_at: datetime = field(default_factory=datetime.utcnow)
    active: bool = True

    def logout(self) -> None:
        if self.active:
            logger.info(f"Account {self.account_id} logged out")
        self.active = False


class AccountService:
    """Account operations on top of AccountRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = AccountRepository(db)

    async def register(
        self,
        username: str,
        nickname: str,
        password: str,
        gender: str,
        confirm_password: Optional[str] = None,
    ) -> AccountProfile:
        """
        Create a new account.

        Raises:
            ValidationError: Bad username/password/gender or confirmation mismatch
            UsernameTakenError: Username already registered
            StorageError: Database failure
        """
        validate_username(username)
        validate_password(password)
        if confirm_password is not None:
            validate_confirmation(password, confirm_password)
        validate_gender(gender)

        if await self.repo.get_by_username(username):
            raise UsernameTakenError(username)

        try:
            account = await self.repo.create(
                username=username,
                nickname=nickname,
                password_hash=hash_password(password),
                gender=gender,
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise UsernameTakenError(username)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to register {username}: {e}")
            raise StorageError(f"Registration failed: {e}") from e

        logger.info(f"Registered account {account.id} ({username})")
        return AccountProfile.model_validate(account)

    async def authenticate(self, username: str, password: str) -> int:
        """
        Check credentials.

        Returns:
            Account id

        Raises:
            AuthError: Unknown username or wrong password
        """
        account = await self.repo.get_by_username(username)
        stored_hash = account.password_hash if account is not None else dummy_hash()
        if not verify_password(password, stored_hash) or account is None:
            logger.info(f"Failed login attempt for {username!r}")
            raise AuthError(INVALID_CREDENTIALS)
        return account.id

    async def login(self, username: str, password: str) -> AccountContext:
        """Authenticate and open an account context."""
        account_id = await self.authenticate(username, password)
        logger.info(f"Account {account_id} logged in")
        return AccountContext(account_id=account_id, username=username)

    async def update_profile(
        self,
        account_id: int,
        username: Optional[str] = None,
        nickname: Optional[str] = None,
        password: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> Optional[AccountProfile]:
        """
        Update only the supplied fields.

        Returns:
            Updated profile, or None if the account does not exist

        Raises:
            ValidationError: Bad username/password/gender
            UsernameTakenError: New username belongs to another account
            StorageError: Database failure
        """
        account = await self.repo.get_by_id(account_id)
        if account is None:
            return None

        changes = {}
        if username is not None and username != account.username:
            validate_username(username)
            if await self.repo.get_by_username(username):
                raise UsernameTakenError(username)
            changes["username"] = username
        if nickname is not None:
            changes["nickname"] = nickname
        if password is not None:
            validate_password(password)
            changes["password_hash"] = hash_password(password)
        if gender is not None:
            validate_gender(gender)
            changes["gender"] = gender

        if not changes:
            return AccountProfile.model_validate(account)

        try:
            account = await self.repo.update(account, **changes)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if "username" in changes:
                raise UsernameTakenError(username)
            logger.error(f"Failed to update account {account_id}: {e}")
            raise StorageError(f"Profile update failed: {e}") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update account {account_id}: {e}")
            raise StorageError(f"Profile update failed: {e}") from e

        logger.info(f"Updated account {account_id}: {sorted(changes)}")
        return AccountProfile.model_validate(account)

    async def get_by_id(self, account_id: int) -> Optional[AccountProfile]:
        """Profile without the password hash, or None."""
        try:
            account = await self.repo.get_by_id(account_id)
        except StorageError as e:
            logger.error(f"Failed to load account {account_id}: {e}")
            return None
        if account is None:
            return None
        return AccountProfile.model_validate(account)
