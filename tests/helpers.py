from __future__ import annotations

from seating_designer.models import DesignDocument, ElementKind, SeatingArea, Stage


class AfterHarness:
    """Stands in for a host timer: records scheduled callbacks, runs them on demand."""

    def __init__(self) -> None:
        self.scheduled: list[tuple[str, int, object]] = []
        self.cancelled: list[object] = []

    def after(self, ms: int, cb) -> str:
        handle = f"h{len(self.scheduled) + 1}"
        self.scheduled.append((handle, ms, cb))
        return handle

    def cancel(self, handle: object) -> None:
        self.cancelled.append(handle)

    def run(self, handle: str) -> None:
        for h, _ms, cb in list(self.scheduled):
            if h == handle:
                cb()
                return
        raise AssertionError(f"Handle {handle} not found")

    def run_pending(self) -> None:
        """Fire every callback that was not cancelled, as if the window elapsed."""
        for h, _ms, cb in list(self.scheduled):
            if h not in self.cancelled:
                cb()
        self.scheduled.clear()


class Recorder:
    def __init__(self) -> None:
        self.docs: list[DesignDocument] = []

    def __call__(self, doc: DesignDocument) -> None:
        self.docs.append(doc)


def sequential_ids():
    counter = {"n": 0}

    def factory(kind: ElementKind) -> str:
        counter["n"] += 1
        prefix = "stage" if kind == ElementKind.stage else "area"
        return f"{prefix}-{100 + counter['n']}"

    return factory


def sample_document() -> DesignDocument:
    return DesignDocument(
        canvas_width=800,
        canvas_height=600,
        floor_label="F1",
        stages=(Stage(id="stage-1", name="F1", x=350, y=50, width=100, height=40),),
        seating_areas=(
            SeatingArea(id="a", name="Main", x=100, y=200, rows=5, columns=8, seat_price=50, vip_price=100),
            SeatingArea(id="b", name="Side", x=500, y=200, rows=3, columns=3, seat_price=30, vip_price=80),
        ),
    )
