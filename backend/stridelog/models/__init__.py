"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.

Note: Feature models are imported lazily to avoid circular imports.
Use direct imports from features/ modules when possible.
"""

from stridelog.models.base import Base


def _get_account_models():
    """Lazy import of Account model."""
    from stridelog.features.accounts.models import Account
    return Account


def _get_activity_models():
    """Lazy import of Activity models."""
    from stridelog.features.activities.models import Activity, RoutePoint
    return Activity, RoutePoint


def register_models() -> None:
    """Import every feature model so Base.metadata is complete."""
    _get_account_models()
    _get_activity_models()


def __getattr__(name):
    if name == "Account":
        return _get_account_models()
    if name == "Activity":
        return _get_activity_models()[0]
    if name == "RoutePoint":
        return _get_activity_models()[1]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "Account",
    "Activity",
    "RoutePoint",
    "register_models",
]
