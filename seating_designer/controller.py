from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .clicks import AfterCancelFn, AfterFn, SeatClickResolver, asyncio_scheduler
from .config import get_settings
from .document import (
    IdFactory,
    LayoutStats,
    add_element,
    default_document,
    find_element,
    layout_stats,
    move_element,
    new_seating_area,
    new_stage,
    remove_element,
    replace_element,
    set_floor_label,
    update_seating_area,
    update_stage,
)
from .models import DesignDocument, Element, ElementKind, Selection, Tool, TransformBox, new_element_id


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragPreview:
    id: str
    kind: ElementKind
    x: float
    y: float


class DesignerController:
    """
    Selection, placement, drag and resize for a controlled DesignDocument.

    The caller owns the document: it is handed in with set_document() and
    every change is reported through on_change with the complete next
    document. The controller keeps a reference to the latest document it
    produced so back-to-back events in one tick see each other's result.

    Without after/after_cancel, seat-click timers run on the asyncio loop
    that is running at construction; with no running loop this raises
    DesignError.
    """

    def __init__(
        self,
        document: DesignDocument,
        on_change: Callable[[DesignDocument], None],
        *,
        after: Optional[AfterFn] = None,
        after_cancel: Optional[AfterCancelFn] = None,
        id_factory: IdFactory = new_element_id,
        click_window_ms: Optional[int] = None,
    ) -> None:
        self._document = document
        self._on_change = on_change
        self._id_factory = id_factory
        self.selection: Optional[Selection] = None
        self.active_tool: Tool = Tool.select
        self._drag: Optional[DragPreview] = None

        if after is None or after_cancel is None:
            after, after_cancel = asyncio_scheduler()
        self.seat_clicks = SeatClickResolver(
            get_document=lambda: self._document,
            commit=self._replace,
            after=after,
            after_cancel=after_cancel,
            window_ms=click_window_ms,
        )

    @property
    def document(self) -> DesignDocument:
        return self._document

    def set_document(self, document: DesignDocument) -> None:
        self._document = document

    def _replace(self, document: DesignDocument) -> None:
        if document is self._document:
            return
        self._document = document
        self._on_change(document)

    # Selection and tools

    def set_tool(self, tool: Tool) -> None:
        self.active_tool = Tool(tool)

    def select(self, element_id: str, kind: ElementKind) -> None:
        if find_element(self._document, element_id, kind) is None:
            return
        self.selection = Selection(element_id, ElementKind(kind))

    def clear_selection(self) -> None:
        self.selection = None

    def is_selected(self, element_id: str, kind: ElementKind) -> bool:
        return self.selection is not None and self.selection == Selection(element_id, kind)

    def selected_element(self) -> Optional[Element]:
        if self.selection is None:
            return None
        return find_element(self._document, self.selection.id, self.selection.kind)

    def click_empty_canvas(self, x: float, y: float) -> Optional[str]:
        if self.active_tool == Tool.place_stage:
            return self.place(ElementKind.stage, x, y)
        if self.active_tool == Tool.place_area:
            return self.place(ElementKind.seating_area, x, y)
        self.clear_selection()
        return None

    def place(self, kind: ElementKind, x: Optional[float] = None, y: Optional[float] = None) -> str:
        doc = self._document
        if ElementKind(kind) == ElementKind.stage:
            element: Element = new_stage(doc, x, y, id_factory=self._id_factory)
        else:
            element = new_seating_area(doc, x, y, id_factory=self._id_factory)
        logger.debug("Placing %s %s at (%s, %s)", element.kind.value, element.id, element.x, element.y)
        self._replace(add_element(doc, element))
        self.selection = Selection(element.id, element.kind)
        self.active_tool = Tool.select
        return element.id

    # Drag: preview while moving, write once on release

    @property
    def drag_preview(self) -> Optional[DragPreview]:
        return self._drag

    def begin_drag(self, element_id: str, kind: ElementKind) -> None:
        element = find_element(self._document, element_id, kind)
        if element is None:
            self._drag = None
            return
        self._drag = DragPreview(element_id, ElementKind(kind), element.x, element.y)

    def drag_to(self, x: float, y: float) -> None:
        if self._drag is None:
            return
        self._drag = DragPreview(self._drag.id, self._drag.kind, x, y)

    def end_drag(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        drag = self._drag
        self._drag = None
        if drag is None:
            return
        self.commit_position(
            drag.id,
            drag.kind,
            drag.x if x is None else x,
            drag.y if y is None else y,
        )

    def commit_position(self, element_id: str, kind: ElementKind, x: float, y: float) -> None:
        element = find_element(self._document, element_id, kind)
        if element is None or (element.x == x and element.y == y):
            return
        logger.debug("Committing position of %s to (%s, %s)", element_id, x, y)
        self._replace(move_element(self._document, element_id, kind, x, y))

    def commit_transform(self, element_id: str, kind: ElementKind, box: TransformBox) -> Optional[TransformBox]:
        """
        Bakes a finished resize into the stored element.

        Returns the box the host node should take on, always with scale 1.
        Seating areas have no resize handles, so only their position is kept.
        A stage smaller than the minimum box keeps its previous geometry.
        """
        element = find_element(self._document, element_id, kind)
        if element is None:
            return None

        if element.kind == ElementKind.seating_area:
            self.commit_position(element_id, kind, box.x, box.y)
            return TransformBox(float(box.x), float(box.y), element.width, element.height, element.rotation)

        width = box.width * box.scale_x
        height = box.height * box.scale_y
        min_box = get_settings().min_box
        if width < min_box or height < min_box:
            logger.debug("Rejecting resize of %s to %sx%s", element_id, width, height)
            return TransformBox(element.x, element.y, element.width, element.height, element.rotation)

        baked = element.model_copy(
            update={
                "x": float(box.x),
                "y": float(box.y),
                "width": float(width),
                "height": float(height),
                "rotation": float(box.rotation),
            }
        )
        self._replace(replace_element(self._document, baked))
        return TransformBox(baked.x, baked.y, baked.width, baked.height, baked.rotation)

    # Edits

    def delete(self, element_id: str, kind: ElementKind) -> None:
        self._replace(remove_element(self._document, element_id, kind))
        if self.is_selected(element_id, kind):
            self.selection = None

    def delete_selected(self) -> None:
        if self.selection is None:
            return
        self.delete(self.selection.id, self.selection.kind)
        self.selection = None

    def set_floor_label(self, label: str) -> None:
        sel = self.selection
        self._replace(
            set_floor_label(
                self._document,
                label,
                selected_id=sel.id if sel else None,
                selected_kind=sel.kind if sel else None,
            )
        )

    def update_area_properties(self, area_id: Optional[str] = None, **fields: Any) -> None:
        if area_id is None:
            if self.selection is None or self.selection.kind != ElementKind.seating_area:
                return
            area_id = self.selection.id
        self._replace(update_seating_area(self._document, area_id, **fields))

    def update_stage_properties(self, stage_id: Optional[str] = None, **fields: Any) -> None:
        if stage_id is None:
            if self.selection is None or self.selection.kind != ElementKind.stage:
                return
            stage_id = self.selection.id
        self._replace(update_stage(self._document, stage_id, **fields))

    def seat_click(self, area_id: str, row: int, col: int) -> None:
        self.seat_clicks.click(area_id, row, col)

    def reset_layout(self) -> None:
        self.seat_clicks.cancel_pending()
        self._drag = None
        self.selection = None
        self._replace(default_document())

    def stats(self) -> LayoutStats:
        return layout_stats(self._document)

    def dispose(self) -> None:
        self.seat_clicks.dispose()
