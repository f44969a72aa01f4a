"""
Period helpers shared by stats endpoints (sales, expenses, dashboard)
"""
from datetime import datetime, timedelta
from enum import Enum

from bizdesk.common.mixins import utcnow


class StatsPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def period_start(period: StatsPeriod, now: datetime = None) -> datetime:
    """
    Start of the period that ends now.

    daily: midnight today, weekly: last 7 days, monthly: first day of the month.
    """
    now = now or utcnow()
    if period == StatsPeriod.DAILY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == StatsPeriod.WEEKLY:
        return now - timedelta(days=7)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
