"""
Entry and exit handling for vehicles on the tolled corridor.

Each plate is either absent or has exactly one open entry. An entry opens
it, the matching exit prices the trip and closes it again. All request
validation happens before anything is written.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tollgate.calculator import TollBreakdown, calculate_toll
from tollgate.crud import find_open_entry_by_plate, insert_entry, delete_entry
from tollgate.errors import (
    TollGateError,
    MissingFieldError,
    UnknownInterchangeError,
    InvalidNumberPlateError,
    DuplicateEntryError,
    NoOpenEntryError,
    InvalidTimeOrderingError,
    UnexpectedError,
)
from tollgate.models import VehicleEntry
from tollgate.rules import is_known_interchange, is_valid_number_plate


def as_utc(moment: datetime) -> datetime:
    """
    Naive timestamps are taken to already be in UTC. Aware ones are shifted
    to UTC, so calendar rules see the UTC day rather than the local one.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def resolve_interchange(interchange: Optional[str], home_interchange: Optional[str]) -> Optional[str]:
    return interchange or home_interchange


def resolve_timestamp(date_time: Optional[datetime], now: Optional[datetime] = None) -> datetime:
    if date_time is not None:
        return as_utc(date_time)
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def validate_request(interchange: Optional[str], number_plate: Optional[str], kind: str):
    if not interchange or not number_plate:
        raise MissingFieldError("Interchange and Number Plate are required.")
    if not is_known_interchange(interchange):
        raise UnknownInterchangeError(f"Invalid {kind} interchange: {interchange}.")
    if not is_valid_number_plate(number_plate):
        raise InvalidNumberPlateError("Invalid number plate format. Expected LLL-NNN.")


async def record_entry(
    db: AsyncSession,
    number_plate: Optional[str],
    interchange: Optional[str] = None,
    home_interchange: Optional[str] = None,
    date_time: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> VehicleEntry:
    interchange = resolve_interchange(interchange, home_interchange)
    validate_request(interchange, number_plate, "entry")
    entry_date_time = resolve_timestamp(date_time, now)

    try:
        existing = await find_open_entry_by_plate(db, number_plate)
        if existing:
            logging.warning(f"Duplicate entry attempt for {number_plate}")
            raise DuplicateEntryError(f"Vehicle with number plate {number_plate} is already entered.")

        new_entry = await insert_entry(db, number_plate, interchange, entry_date_time)
    except IntegrityError:
        await db.rollback()
        logging.warning(f"Unique constraint rejected entry for {number_plate}")
        raise DuplicateEntryError(f"A vehicle with number plate {number_plate} is already entered.")
    except TollGateError:
        raise
    except Exception as e:
        logging.error(f"Error recording vehicle entry: {e}")
        raise UnexpectedError(f"Internal server error: {e}") from e

    logging.info(f"Vehicle entered: {number_plate} at {interchange} ({entry_date_time.isoformat()})")
    return new_entry


async def record_exit(
    db: AsyncSession,
    number_plate: Optional[str],
    interchange: Optional[str] = None,
    home_interchange: Optional[str] = None,
    date_time: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> TollBreakdown:
    interchange = resolve_interchange(interchange, home_interchange)
    validate_request(interchange, number_plate, "exit")

    try:
        entry = await find_open_entry_by_plate(db, number_plate)
        if not entry:
            logging.warning(f"Exit requested for {number_plate} with no open entry")
            raise NoOpenEntryError(f"No entry record found for number plate: {number_plate}.")

        exit_date_time = resolve_timestamp(date_time, now)
        entry_date_time = as_utc(entry.entry_date_time)
        if exit_date_time < entry_date_time:
            raise InvalidTimeOrderingError("Exit date/time cannot be before entry date/time.")

        breakdown = calculate_toll(
            number_plate,
            entry.entry_interchange,
            entry_date_time,
            interchange,
            exit_date_time,
        )

        deleted = await delete_entry(db, entry.id)
        if deleted != 1:
            # Another exit closed this entry first
            logging.warning(f"Entry for {number_plate} already closed")
            raise NoOpenEntryError(f"No entry record found for number plate: {number_plate}.")
    except TollGateError:
        raise
    except Exception as e:
        logging.error(f"Error calculating toll: {e}")
        raise UnexpectedError(f"Internal server error: {e}") from e

    logging.info(f"Toll calculated for {number_plate}: {breakdown.total_charged}")
    return breakdown
