"""
Base service class for Reports module

Provides the owner-scoped base queries and date filtering shared by all
report services.
"""

from datetime import date, datetime, time, timedelta, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from bizdesk.database.database import get_owned_query


class BaseReportService:
    """Base service class for all report services"""

    def __init__(self, db: Session, user_id: UUID):
        self.db = db
        self.user_id = user_id

    def _owned(self, model):
        return get_owned_query(self.db, model, self.user_id)

    def _apply_date_filter(self, query, date_field, start_date: date, end_date: date):
        """Apply an inclusive date range filter to a date column"""
        return query.filter(date_field >= start_date, date_field <= end_date)

    def _apply_datetime_filter(self, query, datetime_field, start_date: date, end_date: date):
        """Apply an inclusive date range filter to a timestamp column"""
        start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
        return query.filter(datetime_field >= start, datetime_field < end)
