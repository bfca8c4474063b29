"""
DateTime utility functions for consistent date handling
Period labellers used to bucket evaluations into trend points
"""

from datetime import datetime, timezone
from typing import Callable, Dict


def get_current_timestamp() -> datetime:
    """
    Get current UTC timestamp
    """
    return datetime.now(timezone.utc)


def day_label(dt: datetime) -> str:
    """Date in YYYY-MM-DD format"""
    return dt.strftime("%Y-%m-%d")


def week_label(dt: datetime) -> str:
    """ISO week, e.g. 2024-W03"""
    year, week, _ = dt.isocalendar()
    return f"{year}-W{week:02d}"


def month_label(dt: datetime) -> str:
    """Short month name with year, e.g. Jan 2024"""
    return dt.strftime("%b %Y")


PERIOD_LABELLERS: Dict[str, Callable[[datetime], str]] = {
    "day": day_label,
    "week": week_label,
    "month": month_label,
}
