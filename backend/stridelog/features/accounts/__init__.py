"""
Account management module.

Usage:
    from stridelog.features.accounts import AccountService, AccountContext

Models:
- Account: Credentials (hashed) and profile

Services:
- AccountService: Register, authenticate, login, edit profile
"""

from .models import Account
from .schemas import AccountCreate, AccountLogin, AccountUpdate, AccountProfile
from .repository import AccountRepository
from .service import AccountService, AccountContext

__all__ = [
    # Models
    "Account",
    # Schemas
    "AccountCreate",
    "AccountLogin",
    "AccountUpdate",
    "AccountProfile",
    # Repositories
    "AccountRepository",
    # Services
    "AccountService",
    "AccountContext",
]
