from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from .geometry import seat_center
from .models import DesignDocument, SeatType
from .seats import resolve_seat


_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def seat_code(floor_label: str, area_name: str, row: int, col: int) -> str:
    """row/col are 1-based here, as printed on tickets."""
    return f"{_NON_ALNUM.sub('', floor_label)}-{_NON_ALNUM.sub('', area_name)}-R{row}-C{col}"


@dataclass(frozen=True)
class SeatRecord:
    id: str
    area_id: str
    row: int
    column: int
    seat_code: str
    price: float
    seat_type: SeatType
    status: str
    x: float
    y: float


def seat_records(doc: DesignDocument) -> Iterator[SeatRecord]:
    for area in doc.seating_areas:
        for r in range(area.rows):
            for c in range(area.columns):
                seat = resolve_seat(area, r, c)
                x, y = seat_center(area, r, c)
                yield SeatRecord(
                    id=f"{area.id}-R{r + 1}-C{c + 1}",
                    area_id=area.id,
                    row=r + 1,
                    column=c + 1,
                    seat_code=seat_code(doc.floor_label, area.name or "", r + 1, c + 1),
                    price=seat.price,
                    seat_type=seat.type,
                    status="inactive" if seat.type == SeatType.deactivated else "active",
                    x=x,
                    y=y,
                )


@dataclass(frozen=True)
class SeatStatistics:
    total: int = 0
    vip: int = 0
    regular: int = 0
    active: int = 0
    inactive: int = 0


def seat_statistics(doc: DesignDocument) -> SeatStatistics:
    counts = {"total": 0, "vip": 0, "regular": 0, "active": 0, "inactive": 0}
    for rec in seat_records(doc):
        counts["total"] += 1
        if rec.status == "inactive":
            counts["inactive"] += 1
            continue
        counts["active"] += 1
        counts[rec.seat_type.value] += 1
    return SeatStatistics(**counts)
