"""
Account schemas.

Pydantic models for account operations.
"""

from pydantic import BaseModel
from typing import Optional


class AccountCreate(BaseModel):
    """Registration request."""

    username: str
    nickname: str
    password: str
    confirm_password: Optional[str] = None
    gender: str


class AccountLogin(BaseModel):
    """Login request."""

    username: str
    password: str


class AccountUpdate(BaseModel):
    """Profile edit: only supplied fields are changed."""

    username: Optional[str] = None
    nickname: Optional[str] = None
    password: Optional[str] = None
    gender: Optional[str] = None


class AccountProfile(BaseModel):
    """Account profile (never includes the password hash)."""

    id: int
    username: str
    nickname: str
    gender: str

    class Config:
        from_attributes = True
