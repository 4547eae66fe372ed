from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import SeatingArea, SeatOverride, SeatType


@dataclass(frozen=True)
class ResolvedSeat:
    type: SeatType
    price: float
    # One of "regular", "vip", "deactivated"; the palette maps it to a colour.
    color_key: str


def default_price(area: SeatingArea, seat_type: SeatType) -> float:
    return area.vip_price if seat_type == SeatType.vip else area.seat_price


def seat_override(area: SeatingArea, row: int, col: int) -> Optional[SeatOverride]:
    return area.individual_seats.get((row, col))


def resolve_seat(area: SeatingArea, row: int, col: int) -> ResolvedSeat:
    override = seat_override(area, row, col)
    if override is not None:
        return ResolvedSeat(type=override.type, price=override.price, color_key=override.type.value)
    return ResolvedSeat(
        type=area.seat_type,
        price=default_price(area, area.seat_type),
        color_key=area.seat_type.value,
    )


def with_seat_override(
    area: SeatingArea,
    row: int,
    col: int,
    seat_type: SeatType,
    price: float,
    *,
    label: Optional[str] = None,
) -> SeatingArea:
    seats = dict(area.individual_seats)
    seats[(row, col)] = SeatOverride(type=seat_type, price=price, label=label)
    return area.model_copy(update={"individual_seats": seats})
