import re
from datetime import datetime

from tollgate.config import INTERCHANGES, NATIONAL_HOLIDAYS
from tollgate.errors import UnknownInterchangeError

NUMBER_PLATE_PATTERN = re.compile(r"[A-Z]{3}-[0-9]{3}")

# datetime.weekday(): Monday == 0
EVEN_PLATE_DAYS = (0, 2)
ODD_PLATE_DAYS = (1, 3)


def is_valid_number_plate(number_plate: str) -> bool:
    """Plates look like LLL-NNN, uppercase letters only."""
    return NUMBER_PLATE_PATTERN.fullmatch(number_plate) is not None


def is_known_interchange(name: str) -> bool:
    return name in INTERCHANGES


def distance_between(entry_interchange: str, exit_interchange: str) -> float:
    if entry_interchange not in INTERCHANGES or exit_interchange not in INTERCHANGES:
        raise UnknownInterchangeError("Invalid interchange name(s) provided.")
    return abs(INTERCHANGES[entry_interchange] - INTERCHANGES[exit_interchange])


def is_weekend(moment: datetime) -> bool:
    return moment.weekday() >= 5


def is_national_holiday(moment: datetime) -> bool:
    return moment.strftime("%m-%d") in NATIONAL_HOLIDAYS


def applies_number_plate_discount(number_plate: str, entry_date_time: datetime) -> bool:
    """
    Mon/Wed favour plates ending in an even digit, Tue/Thu plates ending in
    an odd one. Fri to Sun never qualify.
    """
    last_digit = int(number_plate[-1])
    day = entry_date_time.weekday()

    if day in EVEN_PLATE_DAYS and last_digit % 2 == 0:
        return True
    if day in ODD_PLATE_DAYS and last_digit % 2 == 1:
        return True
    return False
