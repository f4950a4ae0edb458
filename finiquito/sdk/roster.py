"""Roster ingestion.

Parses a block of tab-separated rows pasted from a spreadsheet into
EmployeeRecord objects. The first line is a header. Columns are fixed by
position (0-based):

    0  employee code         7  daily salary (SD)
    1  hire date (alta)      8  RFC
    2  termination (baja)    9  position
    6  full name            10  location
   13  overtime amount      18  pending vacation days (VAC ANT)

Rows that fail validation are dropped without individual errors; an empty
result is the caller's signal that the input was malformed.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .money import parse_number
from .schemas import EmployeeRecord

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

MIN_COLUMNS = 11

COL_ID = 0
COL_HIRE = 1
COL_TERMINATION = 2
COL_NAME = 6
COL_SALARY = 7
COL_RFC = 8
COL_POSITION = 9
COL_LOCATION = 10
COL_OVERTIME = 13
COL_PENDING_VACATION = 18


class NoValidRecordsError(Exception):
    """Raised when a roster yields no usable employee rows."""
    pass


def parse_roster_date(text: str) -> Optional[date]:
    """Parse a dd/mm/yyyy date. Returns None if it is not a real date after 1900."""
    parts = (text or "").strip().split("/")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p) for p in parts)
    except ValueError:
        return None
    if year <= 1900:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _column(columns: List[str], index: int) -> str:
    return columns[index].strip() if index < len(columns) else ""


def parse_row(line: str) -> Optional[EmployeeRecord]:
    """Parse one roster row, or None if it is not a valid employee."""
    columns = line.split("\t")
    if len(columns) < MIN_COLUMNS:
        logger.debug(f"dropping row with {len(columns)} columns (need {MIN_COLUMNS})")
        return None

    hire_date = parse_roster_date(columns[COL_HIRE])
    termination_date = parse_roster_date(columns[COL_TERMINATION])
    daily_salary = parse_number(columns[COL_SALARY], None)

    if hire_date is None or termination_date is None:
        logger.debug(f"dropping row {_column(columns, COL_ID)!r}: unparseable dates")
        return None
    if daily_salary is None or daily_salary <= 0:
        logger.debug(f"dropping row {_column(columns, COL_ID)!r}: invalid daily salary")
        return None

    try:
        return EmployeeRecord(
            id=_column(columns, COL_ID),
            full_name=_column(columns, COL_NAME),
            rfc=_column(columns, COL_RFC),
            position=_column(columns, COL_POSITION),
            location=_column(columns, COL_LOCATION),
            hire_date=hire_date,
            termination_date=termination_date,
            daily_salary=daily_salary,
            pending_vacation_days=parse_number(_column(columns, COL_PENDING_VACATION), 0.0),
            overtime=parse_number(_column(columns, COL_OVERTIME), 0.0),
        )
    except ValidationError as e:
        logger.debug(f"dropping row {_column(columns, COL_ID)!r}: {e}")
        return None


def parse_roster(text: str) -> List[EmployeeRecord]:
    """Parse a pasted roster (header line first) into employee records."""
    lines = text.strip().splitlines()[1:]
    employees = []
    for line in lines:
        if not line.strip():
            continue
        employee = parse_row(line)
        if employee is not None:
            employees.append(employee)
    logger.debug(f"parsed {len(employees)} of {len(lines)} roster rows")
    return employees


def load_roster(path: Path) -> List[EmployeeRecord]:
    """Read and parse a roster file.

    Raises:
        NoValidRecordsError: If no row is a valid employee
    """
    text = Path(path).read_text(encoding="utf-8")
    employees = parse_roster(text)
    if not employees:
        raise NoValidRecordsError(
            f"No valid employee rows found in {path}. "
            f"Expected a header line followed by tab-separated rows with at least "
            f"{MIN_COLUMNS} columns (dd/mm/yyyy dates, positive daily salary)."
        )
    return employees
