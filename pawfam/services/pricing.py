"""Daycare booking pricing"""

import math
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def booking_days(start_date: DateLike, end_date: DateLike) -> int:
    """Whole days billed for a stay, rounding partial days up"""
    return math.ceil((end_date - start_date) / ONE_DAY)


def compute_booking_total(start_date: DateLike, end_date: DateLike, daily_rate: float) -> float:
    """
    Total price of a daycare stay.

    A same-day booking bills zero days. An end date before the start date is
    the caller's problem and yields a negative amount.
    """
    return booking_days(start_date, end_date) * daily_rate
