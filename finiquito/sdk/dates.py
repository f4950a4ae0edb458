"""Calendar and seniority helpers.

All functions operate on `datetime.date` values; datetimes are reduced to
their date part so time-of-day never shifts a day count.
"""

from datetime import date, datetime

# Average calendar-year length including leap years.
DAYS_PER_SENIORITY_YEAR = 365.25


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(a: date, b: date) -> int:
    """Inclusive whole-day count between two dates, in either order.

    Equal dates count as one day; adjacent dates as two.
    """
    return abs((_as_date(b) - _as_date(a)).days) + 1


def seniority_years(hire_date: date, termination_date: date) -> int:
    """Completed years of service."""
    return int(days_between(hire_date, termination_date) // DAYS_PER_SENIORITY_YEAR)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def _anniversary_in(hire_date: date, year: int) -> date:
    """Anniversary of hire_date in the given year.

    A February 29 hire rolls to March 1 in non-leap years.
    """
    if hire_date.month == 2 and hire_date.day == 29 and not is_leap_year(year):
        return date(year, 3, 1)
    return hire_date.replace(year=year)


def last_anniversary(hire_date: date, termination_date: date) -> date:
    """Most recent hire anniversary on or before termination."""
    hire_date = _as_date(hire_date)
    termination_date = _as_date(termination_date)
    anniversary = _anniversary_in(hire_date, termination_date.year)
    if anniversary > termination_date:
        anniversary = _anniversary_in(hire_date, termination_date.year - 1)
    return anniversary


def days_worked_in_year(hire_date: date, termination_date: date) -> int:
    """Days worked in the termination's calendar year, hire day included."""
    hire_date = _as_date(hire_date)
    termination_date = _as_date(termination_date)
    start_of_year = date(termination_date.year, 1, 1)
    return days_between(max(hire_date, start_of_year), termination_date)


def days_since_last_anniversary(hire_date: date, termination_date: date) -> int:
    return days_between(last_anniversary(hire_date, termination_date), termination_date)


def default_salary_days(termination_date: date) -> int:
    """Unpaid days since the most recent half-month cut (1st or 16th)."""
    day = _as_date(termination_date).day
    return day - 15 if day > 15 else day
