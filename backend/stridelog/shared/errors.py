"""
Error taxonomy.

ValidationError and AuthError are meant for the caller (user-facing
messages). StorageError and TrackingError are logged where they occur and
degrade to no-ops or empty results.
"""


class StrideLogError(Exception):
    """Base error."""
    pass


class ValidationError(StrideLogError):
    """Bad input format (username, password, confirmation, gender)."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class AuthError(StrideLogError):
    """Bad credentials or username conflict."""
    pass


class UsernameTakenError(AuthError):
    """Username already registered."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already taken: {username}")


class StorageError(StrideLogError):
    """Connection, read or write failure."""
    pass


class ActivityNotFoundError(StorageError):
    """No activity with the requested id."""

    def __init__(self, activity_id: int):
        self.activity_id = activity_id
        super().__init__(f"Activity not found: {activity_id}")


class TrackingError(StrideLogError):
    """No location available or missing segment anchor."""
    pass
