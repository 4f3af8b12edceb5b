import logging
from datetime import date
from typing import Optional, Sequence

from .config import REFILL_WINDOW_DAYS
from .models import Medication, OverdueRefill, RefillStatus, UpcomingRefill

# Set up logging
logger = logging.getLogger(__name__)

def days_until_refill(refill_date: date, today: date) -> int:
    """
    Whole calendar days from today to the refill date (midnight to midnight),
    negative once the date has passed
    """
    return (refill_date - today).days

class RefillStatusEvaluator:
    """
    Sorts medications into upcoming (due within the window) and overdue refills
    """

    def __init__(self, window_days: int = REFILL_WINDOW_DAYS):
        if window_days < 0:
            raise ValueError("window_days must not be negative")
        self.window_days = window_days

    def evaluate(self, medications: Sequence[Medication], today: Optional[date] = None) -> RefillStatus:
        today = today or date.today()
        status = RefillStatus()

        for med in medications:
            if med.refill_date is None:
                continue

            days_until = days_until_refill(med.refill_date, today)
            if days_until < 0:
                status.overdue.append(OverdueRefill(medication=med, days_overdue=abs(days_until)))
            elif days_until <= self.window_days:
                status.upcoming.append(UpcomingRefill(medication=med, days_until=days_until))

        if status.overdue:
            logger.info(f"{len(status.overdue)} medications are past their refill date")
        return status
