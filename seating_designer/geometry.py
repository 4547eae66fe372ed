from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from shapely import affinity
from shapely.geometry import Point, Polygon as ShapelyPolygon, box

if TYPE_CHECKING:
    from .models import DesignDocument, Element, SeatingArea


CELL_WIDTH = 25
CELL_HEIGHT = 20
SPACING = 5
PADDING = 20  # 10 per side
EDGE = PADDING // 2


def area_dimensions(rows: int, columns: int) -> tuple[int, int]:
    width = columns * (CELL_WIDTH + SPACING) - SPACING + PADDING
    height = rows * (CELL_HEIGHT + SPACING) - SPACING + PADDING
    return width, height


def seat_position(area: "SeatingArea", row: int, col: int) -> tuple[float, float]:
    x = area.x + EDGE + col * (CELL_WIDTH + SPACING)
    y = area.y + EDGE + row * (CELL_HEIGHT + SPACING)
    return x, y


def seat_center(area: "SeatingArea", row: int, col: int) -> tuple[float, float]:
    x, y = seat_position(area, row, col)
    return x + CELL_WIDTH / 2.0, y + CELL_HEIGHT / 2.0


def total_seat_count(doc: "DesignDocument") -> int:
    # Overlapping areas are not deduplicated.
    return sum(area.rows * area.columns for area in doc.seating_areas)


def element_polygon(element: "Element") -> ShapelyPolygon:
    rect = box(element.x, element.y, element.x + element.width, element.y + element.height)
    rotation = getattr(element, "rotation", 0.0) or 0.0
    if rotation:
        # Canvas nodes rotate about their own origin (top-left corner).
        rect = affinity.rotate(rect, rotation, origin=(element.x, element.y))
    return rect


def polygon_contains_point(poly: ShapelyPolygon, x: float, y: float) -> bool:
    # Edges count as inside so a click on a stroke still hits the shape.
    return poly.intersects(Point(x, y))


def element_contains_point(element: "Element", x: float, y: float) -> bool:
    return polygon_contains_point(element_polygon(element), x, y)


def seat_at(area: "SeatingArea", x: float, y: float) -> Optional[tuple[int, int]]:
    """
    Returns the (row, col) cell under a canvas point, or None when the point
    falls in the area's padding, between cells, or outside the area.
    """
    lx = x - area.x - EDGE
    ly = y - area.y - EDGE
    if lx < 0 or ly < 0:
        return None
    col, ox = divmod(lx, CELL_WIDTH + SPACING)
    row, oy = divmod(ly, CELL_HEIGHT + SPACING)
    if ox > CELL_WIDTH or oy > CELL_HEIGHT:
        return None
    row, col = int(row), int(col)
    if row >= area.rows or col >= area.columns:
        return None
    return row, col


def overlapping_area_pairs(doc: "DesignDocument") -> list[tuple[str, str]]:
    areas = list(doc.seating_areas)
    polys = [element_polygon(a) for a in areas]
    out: list[tuple[str, str]] = []
    for i in range(len(areas)):
        for j in range(i + 1, len(areas)):
            # Touching edges are not an overlap.
            if polys[i].intersection(polys[j]).area > 0:
                out.append((areas[i].id, areas[j].id))
    return out
