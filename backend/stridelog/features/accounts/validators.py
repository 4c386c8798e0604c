"""
Registration and profile input validation.
"""

import re

from stridelog.config import settings
from stridelog.shared.errors import ValidationError

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9]+")

# Placeholder shown before a gender is picked
GENDER_UNSET = "-"


def validate_username(username: str) -> str:
    if not username or not USERNAME_PATTERN.fullmatch(username):
        raise ValidationError("username", "must be non-empty ASCII letters and digits")
    return username


def validate_password(password: str) -> str:
    if not password or len(password) < settings.min_password_length:
        raise ValidationError(
            "password",
            f"must be at least {settings.min_password_length} characters"
        )
    return password


def validate_confirmation(password: str, confirm_password: str) -> None:
    if password != confirm_password:
        raise ValidationError("confirm_password", "passwords do not match")


def validate_gender(gender: str) -> str:
    if not gender or gender == GENDER_UNSET:
        raise ValidationError("gender", "must be selected")
    return gender
