"""
Pure operations over a DesignDocument.

Every function returns a new document (or the same instance when nothing
changed); nothing here mutates its input.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .config import get_settings
from .geometry import overlapping_area_pairs, total_seat_count
from .models import (
    DesignDocument,
    Element,
    ElementKind,
    SeatingArea,
    SeatType,
    Stage,
    new_element_id,
)
from .seats import with_seat_override


logger = logging.getLogger(__name__)

IdFactory = Callable[[ElementKind], str]

DEFAULT_STAGE_POS = (100.0, 100.0)
DEFAULT_AREA_POS = (200.0, 150.0)
DEFAULT_STAGE_SIZE = (120.0, 50.0)
DEFAULT_AREA_GRID = (5, 8)


def default_document() -> DesignDocument:
    settings = get_settings()
    return DesignDocument(
        canvas_width=settings.canvas_width,
        canvas_height=settings.canvas_height,
        floor_label="F1",
        stages=(Stage(id="stage-1", name="F1", x=350, y=50, width=100, height=40),),
        seating_areas=(),
    )


def new_stage(
    doc: DesignDocument,
    x: Optional[float] = None,
    y: Optional[float] = None,
    *,
    id_factory: IdFactory = new_element_id,
) -> Stage:
    w, h = DEFAULT_STAGE_SIZE
    return Stage(
        id=id_factory(ElementKind.stage),
        name=doc.floor_label or "Stage",
        x=DEFAULT_STAGE_POS[0] if x is None else x,
        y=DEFAULT_STAGE_POS[1] if y is None else y,
        width=w,
        height=h,
    )


def new_seating_area(
    doc: DesignDocument,
    x: Optional[float] = None,
    y: Optional[float] = None,
    *,
    id_factory: IdFactory = new_element_id,
) -> SeatingArea:
    rows, columns = DEFAULT_AREA_GRID
    return SeatingArea(
        id=id_factory(ElementKind.seating_area),
        name=doc.floor_label or f"Area {len(doc.seating_areas) + 1}",
        x=DEFAULT_AREA_POS[0] if x is None else x,
        y=DEFAULT_AREA_POS[1] if y is None else y,
        rows=rows,
        columns=columns,
    )


def _collection_field(kind: ElementKind) -> str:
    return "stages" if kind == ElementKind.stage else "seating_areas"


def find_element(doc: DesignDocument, element_id: str, kind: ElementKind) -> Optional[Element]:
    for element in doc.elements(kind):
        if element.id == element_id:
            return element
    return None


def add_element(doc: DesignDocument, element: Element) -> DesignDocument:
    field = _collection_field(element.kind)
    return doc.model_copy(update={field: doc.elements(element.kind) + (element,)})


def replace_element(doc: DesignDocument, element: Element) -> DesignDocument:
    elements = doc.elements(element.kind)
    if not any(e.id == element.id for e in elements):
        return doc
    updated = tuple(element if e.id == element.id else e for e in elements)
    return doc.model_copy(update={_collection_field(element.kind): updated})


def _update_element(doc: DesignDocument, element_id: str, kind: ElementKind, **changes: Any) -> DesignDocument:
    element = find_element(doc, element_id, kind)
    if element is None:
        return doc
    return replace_element(doc, element.model_copy(update=changes))


def remove_element(doc: DesignDocument, element_id: str, kind: ElementKind) -> DesignDocument:
    elements = doc.elements(kind)
    kept = tuple(e for e in elements if e.id != element_id)
    if len(kept) == len(elements):
        return doc
    return doc.model_copy(update={_collection_field(kind): kept})


def move_element(doc: DesignDocument, element_id: str, kind: ElementKind, x: float, y: float) -> DesignDocument:
    return _update_element(doc, element_id, kind, x=float(x), y=float(y))


def rename_element(doc: DesignDocument, element_id: str, kind: ElementKind, name: str) -> DesignDocument:
    return _update_element(doc, element_id, kind, name=name)


def set_floor_label(
    doc: DesignDocument,
    label: str,
    *,
    selected_id: Optional[str] = None,
    selected_kind: Optional[ElementKind] = None,
) -> DesignDocument:
    updated = doc.model_copy(update={"floor_label": label})
    if selected_id and selected_kind is not None:
        updated = rename_element(updated, selected_id, selected_kind, label)
    return updated


def coerce_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    try:
        result = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    # 0 counts as no value, like an empty form field.
    return result or fallback


def coerce_float(value: Any, fallback: float) -> float:
    if isinstance(value, bool):
        return fallback
    try:
        result = float(value)
    except (TypeError, ValueError):
        return fallback
    if result != result:  # NaN
        return fallback
    return result or fallback


def clamp_grid(value: Any) -> int:
    max_grid = get_settings().max_grid
    return max(1, min(max_grid, coerce_int(value, 1)))


def update_seating_area(
    doc: DesignDocument,
    area_id: str,
    *,
    rows: Any = None,
    columns: Any = None,
    seat_price: Any = None,
    vip_price: Any = None,
    seat_type: Any = None,
) -> DesignDocument:
    """
    Applies property-panel edits to one seating area.

    Values arrive as raw form input and are normalized, never rejected:
    rows/columns fall back to 1 and are clamped to the grid limit, prices
    fall back to 0 and are floored at 0, an unknown seat type is ignored.
    Width and height follow rows/columns automatically.
    """
    changes: dict[str, Any] = {}
    if rows is not None:
        changes["rows"] = clamp_grid(rows)
    if columns is not None:
        changes["columns"] = clamp_grid(columns)
    if seat_price is not None:
        changes["seat_price"] = max(0.0, coerce_float(seat_price, 0.0))
    if vip_price is not None:
        changes["vip_price"] = max(0.0, coerce_float(vip_price, 0.0))
    if seat_type is not None:
        try:
            changes["seat_type"] = SeatType(seat_type)
        except ValueError:
            logger.warning("Ignoring unknown seat type %r for area %s", seat_type, area_id)
    if not changes:
        return doc
    return _update_element(doc, area_id, ElementKind.seating_area, **changes)


def update_stage(
    doc: DesignDocument,
    stage_id: str,
    *,
    width: Any = None,
    height: Any = None,
) -> DesignDocument:
    min_box = get_settings().min_box
    changes: dict[str, Any] = {}
    if width is not None:
        changes["width"] = max(float(min_box), float(coerce_int(width, 100)))
    if height is not None:
        changes["height"] = max(float(min_box), float(coerce_int(height, 40)))
    if not changes:
        return doc
    return _update_element(doc, stage_id, ElementKind.stage, **changes)


def set_seat_override(
    doc: DesignDocument,
    area_id: str,
    row: int,
    col: int,
    seat_type: SeatType,
    price: float,
) -> DesignDocument:
    area = find_element(doc, area_id, ElementKind.seating_area)
    if area is None:
        return doc
    return replace_element(doc, with_seat_override(area, row, col, seat_type, price))


@dataclass(frozen=True)
class LayoutStats:
    stages: int
    seating_areas: int
    total_seats: int
    overlapping_areas: tuple[tuple[str, str], ...]


def layout_stats(doc: DesignDocument) -> LayoutStats:
    return LayoutStats(
        stages=len(doc.stages),
        seating_areas=len(doc.seating_areas),
        total_seats=total_seat_count(doc),
        overlapping_areas=tuple(overlapping_area_pairs(doc)),
    )
