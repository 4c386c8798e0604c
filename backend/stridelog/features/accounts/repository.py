"""
Account repository.

Data access layer for the Account model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.shared.repository import BaseRepository
from .models import Account


class AccountRepository(BaseRepository[Account]):
    """Repository for Account operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Account)

    async def get_by_username(self, username: str) -> Account | None:
        """
        Get account by username.

        Args:
            username: Exact username

        Returns:
            Account if found, None otherwise
        """
        return await self.get_by(username=username)
