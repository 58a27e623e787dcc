from dataclasses import dataclass
from datetime import datetime

from tollgate.config import (
    BASE_RATE,
    PER_KM_RATE,
    WEEKEND_RATE_MULTIPLIER,
    NUMBER_PLATE_DISCOUNT,
    NATIONAL_HOLIDAY_DISCOUNT,
)
from tollgate.rules import (
    distance_between,
    is_weekend,
    is_national_holiday,
    applies_number_plate_discount,
)


@dataclass(frozen=True)
class TollBreakdown:
    base_rate: float
    distance_cost: float
    distance_breakdown: str
    sub_total: float
    discount: float
    total_charged: float


def calculate_toll(
    number_plate: str,
    entry_interchange: str,
    entry_date_time: datetime,
    exit_interchange: str,
    exit_date_time: datetime,
) -> TollBreakdown:
    """
    Work out the charge for a single trip.

    Intermediate figures keep full precision; only the returned breakdown is
    rounded. A national holiday on the exit day overrides the number plate
    discount, which itself is judged against the entry day.
    """
    distance = distance_between(entry_interchange, exit_interchange)

    per_km_rate = PER_KM_RATE
    if is_weekend(exit_date_time):
        per_km_rate *= WEEKEND_RATE_MULTIPLIER

    distance_cost = distance * per_km_rate
    sub_total = BASE_RATE + distance_cost

    if is_national_holiday(exit_date_time):
        discount = sub_total * NATIONAL_HOLIDAY_DISCOUNT
    elif applies_number_plate_discount(number_plate, entry_date_time):
        discount = sub_total * NUMBER_PLATE_DISCOUNT
    else:
        discount = 0.0

    discount = min(discount, sub_total)
    total_charged = sub_total - discount

    return TollBreakdown(
        base_rate=round(float(BASE_RATE), 2),
        distance_cost=round(distance_cost, 2),
        distance_breakdown=f"Distance: {distance}KM, Rate: {per_km_rate:.1f}/KM",
        sub_total=round(sub_total, 2),
        discount=round(discount, 2),
        total_charged=round(total_charged, 2),
    )
