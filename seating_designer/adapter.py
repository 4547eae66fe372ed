"""
Bridge between a host canvas toolkit and the designer controller.

The host forwards pointer, palette drag-and-drop and transform events here in
canvas coordinates and draws whatever build_scene() returns. Nothing in this
module owns model state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .config import get_settings
from .controller import DesignerController, DragPreview
from .geometry import CELL_HEIGHT, CELL_WIDTH, element_contains_point, seat_at, seat_position
from .models import DesignDocument, ElementKind, SeatingArea, Selection, Stage, TransformBox
from .palette import Palette, ShapeColors, get_palette
from .seats import resolve_seat


logger = logging.getLogger(__name__)

STAGE_ANCHORS = (
    "top-left",
    "top-center",
    "top-right",
    "middle-right",
    "bottom-right",
    "bottom-center",
    "bottom-left",
    "middle-left",
)
LABEL_OFFSET = 20


@dataclass(frozen=True)
class RectShape:
    key: str
    x: float
    y: float
    width: float
    height: float
    fill: str
    stroke: str
    stroke_width: float = 1
    corner_radius: float = 0
    rotation: float = 0.0
    shadow_blur: float = 0
    draggable: bool = False
    anchors: tuple[str, ...] = ()


@dataclass(frozen=True)
class TextShape:
    key: str
    x: float
    y: float
    text: str
    fill: str
    font_size: int = 14
    bold: bool = True


Shape = Union[RectShape, TextShape]


@dataclass(frozen=True)
class Hit:
    kind: ElementKind
    id: str
    seat: Optional[tuple[int, int]] = None


@dataclass(frozen=True)
class CanvasRect:
    """On-screen origin of the canvas element (its bounding box)."""

    left: float
    top: float


def _shape_style(colors: ShapeColors, selected: bool, hovered: bool) -> tuple[str, float, float]:
    if selected:
        return colors.stroke_selected, 3, 8
    if hovered:
        return colors.stroke_hover, 2, 4
    return colors.stroke, 1, 0


def _moved(element, drag: Optional[DragPreview]):
    if drag is None or drag.id != element.id or drag.kind != element.kind:
        return element
    return element.model_copy(update={"x": drag.x, "y": drag.y})


def build_scene(
    doc: DesignDocument,
    *,
    selection: Optional[Selection] = None,
    hovered: Optional[Selection] = None,
    drag: Optional[DragPreview] = None,
    palette: Optional[Palette] = None,
) -> list[Shape]:
    palette = palette or get_palette(get_settings().theme)
    shapes: list[Shape] = []

    def element_shapes(element: Union[Stage, SeatingArea], colors: ShapeColors, fallback: str, radius: float) -> None:
        ref = Selection(element.id, element.kind)
        is_selected = selection == ref
        stroke, stroke_width, blur = _shape_style(colors, is_selected, hovered == ref)
        shapes.append(
            TextShape(
                key=f"label-{element.id}",
                x=element.x,
                y=element.y - LABEL_OFFSET,
                text=element.name or fallback,
                fill=palette.label,
            )
        )
        anchors = STAGE_ANCHORS if is_selected and element.kind == ElementKind.stage else ()
        shapes.append(
            RectShape(
                key=element.id,
                x=element.x,
                y=element.y,
                width=element.width,
                height=element.height,
                fill=colors.fill,
                stroke=stroke,
                stroke_width=stroke_width,
                corner_radius=radius,
                rotation=element.rotation,
                shadow_blur=blur,
                draggable=True,
                anchors=anchors,
            )
        )

    for stage in doc.stages:
        element_shapes(_moved(stage, drag), palette.stage, "Stage", 12)

    for area in doc.seating_areas:
        area = _moved(area, drag)
        element_shapes(area, palette.seating_area, "Seating Area", 6)
        for row in range(area.rows):
            for col in range(area.columns):
                x, y = seat_position(area, row, col)
                seat = resolve_seat(area, row, col)
                shapes.append(
                    RectShape(
                        key=f"seat-{area.id}-{row}-{col}",
                        x=x,
                        y=y,
                        width=CELL_WIDTH,
                        height=CELL_HEIGHT,
                        fill=palette.seats.for_key(seat.color_key),
                        stroke=palette.seats.border,
                        corner_radius=6,
                    )
                )
    return shapes


def hit_test(doc: DesignDocument, x: float, y: float) -> Optional[Hit]:
    # Topmost first: areas (and their seats) paint over stages.
    for area in reversed(doc.seating_areas):
        cell = seat_at(area, x, y)
        if cell is not None:
            return Hit(ElementKind.seating_area, area.id, cell)
        if element_contains_point(area, x, y):
            return Hit(ElementKind.seating_area, area.id)
    for stage in reversed(doc.stages):
        if element_contains_point(stage, x, y):
            return Hit(ElementKind.stage, stage.id)
    return None


@dataclass
class _PointerDrag:
    id: str
    kind: ElementKind
    dx: float
    dy: float
    moved: bool = False


@dataclass
class CanvasAdapter:
    controller: DesignerController
    palette: Optional[Palette] = None
    palette_drag_kind: Optional[ElementKind] = None
    _pointer: Optional[_PointerDrag] = field(default=None, init=False, repr=False)

    @property
    def dragging_from_palette(self) -> bool:
        return self.palette_drag_kind is not None

    def palette_drag_start(self, kind: ElementKind) -> None:
        self.palette_drag_kind = ElementKind(kind)

    def palette_drag_end(self) -> None:
        self.palette_drag_kind = None

    def drop(self, page_x: float, page_y: float, canvas: CanvasRect) -> Optional[str]:
        kind = self.palette_drag_kind
        if kind is None:
            return None
        x = page_x - canvas.left
        y = page_y - canvas.top
        logger.debug("Palette drop of %s at canvas (%s, %s)", kind.value, x, y)
        try:
            return self.controller.place(kind, x, y)
        finally:
            self.palette_drag_end()

    def pointer_click(self, x: float, y: float) -> Optional[Hit]:
        hit = hit_test(self.controller.document, x, y)
        if hit is None:
            self.controller.click_empty_canvas(x, y)
        elif hit.seat is not None:
            # Seat clicks stay on the seat and never select the area.
            self.controller.seat_click(hit.id, *hit.seat)
        else:
            self.controller.select(hit.id, hit.kind)
        return hit

    def pointer_down(self, x: float, y: float) -> None:
        hit = hit_test(self.controller.document, x, y)
        if hit is None or hit.seat is not None:
            self._pointer = None
            return
        self.controller.begin_drag(hit.id, hit.kind)
        preview = self.controller.drag_preview
        if preview is None:
            self._pointer = None
            return
        self._pointer = _PointerDrag(hit.id, hit.kind, x - preview.x, y - preview.y)

    def pointer_move(self, x: float, y: float) -> None:
        if self._pointer is None:
            return
        self._pointer.moved = True
        self.controller.drag_to(x - self._pointer.dx, y - self._pointer.dy)

    def pointer_up(self, x: float, y: float) -> None:
        pointer = self._pointer
        self._pointer = None
        if pointer is None:
            return
        if not pointer.moved:
            self.controller.end_drag()
            return
        self.controller.end_drag(x - pointer.dx, y - pointer.dy)

    def transform_end(self, element_id: str, kind: ElementKind, box: TransformBox) -> Optional[TransformBox]:
        return self.controller.commit_transform(element_id, kind, box)

    def scene(self, hovered: Optional[Selection] = None) -> list[Shape]:
        return build_scene(
            self.controller.document,
            selection=self.controller.selection,
            hovered=hovered,
            drag=self.controller.drag_preview,
            palette=self.palette,
        )
