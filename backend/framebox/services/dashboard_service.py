"""
Dashboard Service - Monthly and yearly figures
"""
import asyncio
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Dict, Tuple

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session, sessionmaker

from framebox.models import Appointment, AppointmentStatus, Client, Service, TransactionType
from framebox.schemas import to_local_naive
from framebox.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


def month_bounds(now: datetime) -> Tuple[date, date]:
    """First and last day of the calendar month containing ``now``"""
    month_start = date(now.year, now.month, 1)
    return month_start, month_start + relativedelta(months=1) - relativedelta(days=1)


def year_bounds(now: datetime) -> Tuple[date, date]:
    return date(now.year, 1, 1), date(now.year, 12, 31)


class DashboardService:
    """
    Runs each dashboard query in its own worker thread and session, waits for
    all of them and reduces the results. One failing query fails the lot.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _run(self, query: Callable[[Session], object]):
        db = self.session_factory()
        try:
            return query(db)
        finally:
            db.close()

    async def get_stats(self, now: datetime = None) -> Dict:
        """Get main dashboard statistics"""
        now = to_local_naive(now) if now else datetime.now()
        month_start, month_end = month_bounds(now)
        year_start, year_end = year_bounds(now)

        income = TransactionType.INCOME.value
        expense = TransactionType.EXPENSE.value

        queries = [
            lambda db: db.query(Client).count(),
            lambda db: db.query(Service).count(),
            lambda db: TransactionService(db).sum_amount(income, month_start, month_end),
            lambda db: TransactionService(db).sum_amount(expense, month_start, month_end),
            lambda db: TransactionService(db).sum_amount(income, year_start, year_end),
            lambda db: db.query(Appointment).filter(
                Appointment.status == AppointmentStatus.SCHEDULED.value,
                Appointment.start_date >= now
            ).count(),
        ]

        try:
            results = await asyncio.gather(
                *(asyncio.to_thread(self._run, query) for query in queries)
            )
        except Exception:
            logger.exception("Dashboard statistics failed for %s", now.isoformat())
            raise

        (total_clients, total_services, monthly_income,
         monthly_expense, yearly_income, upcoming_appointments) = results

        return {
            "total_clients": total_clients or 0,
            "total_services": total_services or 0,
            "monthly_income": monthly_income or Decimal("0.00"),
            "monthly_expense": monthly_expense or Decimal("0.00"),
            "yearly_income": yearly_income or Decimal("0.00"),
            "upcoming_appointments": upcoming_appointments or 0,
            "monthly_balance": (monthly_income or Decimal("0.00")) - (monthly_expense or Decimal("0.00")),
            "reference_time": now,
        }
