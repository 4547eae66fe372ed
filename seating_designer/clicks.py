from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import get_settings
from .document import find_element, set_seat_override
from .models import DesignDocument, DesignError, ElementKind, SeatType
from .seats import default_price, resolve_seat


logger = logging.getLogger(__name__)

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]


def asyncio_scheduler(loop: Optional[asyncio.AbstractEventLoop] = None) -> tuple[AfterFn, AfterCancelFn]:
    """
    Timer seam backed by an asyncio loop (the running one if none is given).

    The loop is looked up here, not on the first click. Without one, raises
    DesignError: synchronous hosts pass their own after/after_cancel.
    """
    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise DesignError(
                "no running asyncio event loop; pass after/after_cancel from the host toolkit"
            ) from e
    target = loop

    def after(delay_ms: int, callback: Callable[[], None]) -> object:
        return target.call_later(delay_ms / 1000.0, callback)

    def after_cancel(handle: object) -> None:
        handle.cancel()  # type: ignore[attr-defined]

    return after, after_cancel


@dataclass(frozen=True)
class SeatRef:
    area_id: str
    row: int
    col: int


class SeatClickResolver:
    """
    Tells a single click on a seat from a double click.

    A first click arms a delayed task for that seat. A second click on the
    same seat inside the window cancels it and deactivates the seat. A click
    on a different seat cancels whatever was pending, so the earlier seat's
    toggle is dropped, and arms a new task. When a task fires, the seat
    toggles regular -> vip, or vip/deactivated -> regular, using the type
    seen at click time.
    """

    def __init__(
        self,
        *,
        get_document: Callable[[], DesignDocument],
        commit: Callable[[DesignDocument], None],
        after: AfterFn,
        after_cancel: AfterCancelFn,
        window_ms: Optional[int] = None,
    ) -> None:
        self._get_document = get_document
        self._commit = commit
        self._after = after
        self._after_cancel = after_cancel
        self.window_ms = get_settings().click_window_ms if window_ms is None else int(window_ms)

        self._pending_key: Optional[SeatRef] = None
        self._pending_handle: object | None = None
        self._generation = 0

    @property
    def pending_key(self) -> Optional[SeatRef]:
        return self._pending_key

    def click(self, area_id: str, row: int, col: int) -> None:
        doc = self._get_document()
        area = find_element(doc, area_id, ElementKind.seating_area)
        if area is None:
            logger.debug("Seat click on unknown area %s ignored", area_id)
            return

        key = SeatRef(area_id, row, col)
        current_type = resolve_seat(area, row, col).type

        if self._pending_handle is not None and self._pending_key == key:
            self.cancel_pending()
            logger.debug("Double click on %s R%dC%d: deactivating", area_id, row, col)
            self._commit(set_seat_override(doc, area_id, row, col, SeatType.deactivated, 0.0))
            return

        pending = self._pending_key
        if pending is not None and pending != key:
            logger.debug("Abandoning pending click on %s R%dC%d", pending.area_id, pending.row, pending.col)
        self.cancel_pending()

        new_type = SeatType.vip if current_type == SeatType.regular else SeatType.regular
        new_price = default_price(area, new_type)
        self._generation += 1
        generation = self._generation
        self._pending_key = key
        self._pending_handle = self._after(
            self.window_ms,
            lambda: self._fire(generation, key, new_type, new_price),
        )

    def _fire(self, generation: int, key: SeatRef, new_type: SeatType, new_price: float) -> None:
        if generation != self._generation or self._pending_key != key:
            # Cancelled, but the host timer ran anyway.
            return
        self._pending_key = None
        self._pending_handle = None
        logger.debug("Single click on %s R%dC%d: %s at %s", key.area_id, key.row, key.col, new_type.value, new_price)
        doc = self._get_document()
        self._commit(set_seat_override(doc, key.area_id, key.row, key.col, new_type, new_price))

    def cancel_pending(self) -> None:
        handle = self._pending_handle
        self._pending_handle = None
        self._pending_key = None
        self._generation += 1
        if handle is not None:
            self._after_cancel(handle)

    def dispose(self) -> None:
        self.cancel_pending()
