"""Small helpers shared by every layer."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time without tzinfo; every stored timestamp uses this form."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
