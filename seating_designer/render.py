from __future__ import annotations

from .models import SeatingArea, SeatType
from .seats import resolve_seat


GLYPHS = {
    SeatType.regular: ".",
    SeatType.vip: "V",
    SeatType.deactivated: "X",
}


def _cell(glyph: str, width: int) -> str:
    return glyph.center(width)


def render_area_ascii(area: SeatingArea, *, cell_width: int = 3) -> str:
    cell_width = max(3, int(cell_width))

    header = " " * (cell_width + 2) + " ".join(f"C{c}".center(cell_width) for c in range(area.columns))
    lines = [header]
    for r in range(area.rows):
        row_cells = " ".join(_cell(GLYPHS[resolve_seat(area, r, c).type], cell_width) for c in range(area.columns))
        lines.append(f"R{r}".ljust(cell_width + 2) + row_cells)
    return "\n".join(lines)
