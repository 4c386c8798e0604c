"""
Formatting utilities for display and storage.
"""


def format_duration(seconds: int) -> str:
    """
    Format elapsed seconds as 'HH:MM:SS'.

    Args:
        seconds: Elapsed active seconds (negative values clamp to 0)

    Returns:
        Formatted string (e.g., '01:02:03')
    """
    seconds = max(int(seconds), 0)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def parse_duration(duration: str) -> int:
    """
    Parse an 'HH:MM:SS' string back to seconds.

    Malformed values parse as 0.
    """
    parts = duration.split(":") if duration else []
    if len(parts) != 3:
        return 0
    try:
        hours, minutes, secs = (int(part) for part in parts)
    except ValueError:
        return 0
    return hours * 3600 + minutes * 60 + secs


def format_distance_km(distance_km: float) -> str:
    """Format distance as 'X.XX km'."""
    return f"{distance_km:.2f} km"
