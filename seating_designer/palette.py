from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShapeColors:
    fill: str
    stroke: str
    stroke_selected: str
    stroke_hover: str


@dataclass(frozen=True)
class SeatColors:
    regular: str
    vip: str
    deactivated: str
    border: str
    border_hover: str

    def for_key(self, color_key: str) -> str:
        return {"regular": self.regular, "vip": self.vip, "deactivated": self.deactivated}[color_key]


@dataclass(frozen=True)
class Palette:
    canvas: str
    canvas_border: str
    stage: ShapeColors
    seating_area: ShapeColors
    seats: SeatColors
    label: str
    shadow: str
    drop_hint: str


LIGHT = Palette(
    canvas="#fafafa",
    canvas_border="#e4e4e7",
    stage=ShapeColors(fill="#8b4513", stroke="#654321", stroke_selected="#2563eb", stroke_hover="#4338ca"),
    seating_area=ShapeColors(fill="#1f2937", stroke="#374151", stroke_selected="#2563eb", stroke_hover="#4338ca"),
    seats=SeatColors(regular="#10b981", vip="#7c3aed", deactivated="#6b7280", border="#ffffff", border_hover="#fbbf24"),
    label="#1f2937",
    shadow="rgba(0, 0, 0, 0.1)",
    drop_hint="#2563eb",
)

DARK = Palette(
    canvas="#0f172a",
    canvas_border="#1e293b",
    stage=ShapeColors(fill="#d97706", stroke="#92400e", stroke_selected="#3b82f6", stroke_hover="#60a5fa"),
    seating_area=ShapeColors(fill="#374151", stroke="#4b5563", stroke_selected="#3b82f6", stroke_hover="#60a5fa"),
    seats=SeatColors(regular="#059669", vip="#8b5cf6", deactivated="#9ca3af", border="#1f2937", border_hover="#fbbf24"),
    label="#e2e8f0",
    shadow="rgba(0, 0, 0, 0.3)",
    drop_hint="#3b82f6",
)


def get_palette(theme: str) -> Palette:
    return DARK if theme == "dark" else LIGHT
