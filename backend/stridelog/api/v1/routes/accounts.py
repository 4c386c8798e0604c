"""
Account Routes

Registration, login and profile edits.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from stridelog.db.session import get_async_db
from stridelog.features.accounts import (
    AccountCreate,
    AccountLogin,
    AccountProfile,
    AccountService,
    AccountUpdate,
)
from stridelog.shared.errors import AuthError, StorageError, UsernameTakenError, ValidationError

router = APIRouter()


# === Schemas ===

class LoginResponse(BaseModel):
    """Successful login."""
    account_id: int
    username: str


# === Helpers ===

def _raise_http(error: Exception):
    """Map domain errors to HTTP errors."""
    if isinstance(error, ValidationError):
        raise HTTPException(status_code=422, detail={"field": error.field, "message": error.message})
    if isinstance(error, UsernameTakenError):
        raise HTTPException(status_code=409, detail=str(error))
    if isinstance(error, AuthError):
        raise HTTPException(status_code=401, detail=str(error))
    if isinstance(error, StorageError):
        raise HTTPException(status_code=503, detail="Storage unavailable")
    raise error


# === Endpoints ===

@router.post("/register", response_model=AccountProfile, status_code=status.HTTP_201_CREATED)
async def register(request: AccountCreate, db: AsyncSession = Depends(get_async_db)):
    """Create an account."""
    service = AccountService(db)
    try:
        return await service.register(
            username=request.username,
            nickname=request.nickname,
            password=request.password,
            gender=request.gender,
            confirm_password=request.confirm_password,
        )
    except (ValidationError, AuthError, StorageError) as e:
        _raise_http(e)


@router.post("/login", response_model=LoginResponse)
async def login(request: AccountLogin, db: AsyncSession = Depends(get_async_db)):
    """Check credentials and return the account id."""
    service = AccountService(db)
    try:
        context = await service.login(request.username, request.password)
    except (AuthError, StorageError) as e:
        _raise_http(e)
    return LoginResponse(account_id=context.account_id, username=context.username)


@router.get("/{account_id}", response_model=AccountProfile)
async def get_account(account_id: int, db: AsyncSession = Depends(get_async_db)):
    """Get account profile."""
    profile = await AccountService(db).get_by_id(account_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return profile


@router.patch("/{account_id}", response_model=AccountProfile)
async def update_account(
    account_id: int,
    request: AccountUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    """Update only the supplied profile fields."""
    service = AccountService(db)
    try:
        profile = await service.update_profile(
            account_id,
            **request.model_dump(exclude_none=True),
        )
    except (ValidationError, AuthError, StorageError) as e:
        _raise_http(e)
    if profile is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return profile
