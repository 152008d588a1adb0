"""FastAPI dependency injection."""

from datetime import date


def get_today() -> date:
    """Reference date for schedules and holding periods when the request omits one."""
    return date.today()
