"""
Account model.

Stores credentials (hashed) and profile fields.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime

from stridelog.models.base import Base


class Account(Base):
    """
    Application account.

    The password is never stored in plain text; see `passwords.hash_password`.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), unique=True, index=True, nullable=False)

    # Profile
    nickname = Column(String(100), nullable=False, default="")
    gender = Column(String(20), nullable=False, default="-")

    # Credentials
    password_hash = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Account {self.id} ({self.username})>"
