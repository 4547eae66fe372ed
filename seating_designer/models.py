from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .config import get_settings
from .geometry import area_dimensions


logger = logging.getLogger(__name__)

STAGE_COLOR = "#8B4513"
AREA_COLOR = "#000000"


class DesignError(Exception):
    pass


class SeatType(str, Enum):
    regular = "regular"
    vip = "vip"
    deactivated = "deactivated"


class ElementKind(str, Enum):
    stage = "stage"
    seating_area = "seatingArea"


class Tool(str, Enum):
    select = "select"
    place_stage = "placeStage"
    place_area = "placeArea"


SeatKey = tuple[int, int]


def format_seat_key(key: SeatKey) -> str:
    return f"{key[0]}-{key[1]}"


def parse_seat_key(raw: Any) -> SeatKey:
    """
    Accepts a (row, col) pair or the host's "{row}-{col}" string form.
    """
    if isinstance(raw, str):
        parts = raw.split("-")
        if len(parts) != 2:
            raise ValueError(f"invalid seat key: {raw!r}")
        row, col = parts
    else:
        try:
            row, col = raw
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid seat key: {raw!r}") from e
    try:
        r, c = int(row), int(col)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid seat key: {raw!r}") from e
    if r < 0 or c < 0:
        raise ValueError(f"invalid seat key: {raw!r}")
    return (r, c)


class _DesignModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SeatOverride(_DesignModel):
    type: SeatType
    price: float = 0.0
    label: Optional[str] = None


class Stage(_DesignModel):
    kind: ClassVar[ElementKind] = ElementKind.stage

    id: str
    name: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    width: float = 120.0
    height: float = 50.0
    rotation: float = 0.0
    color: str = STAGE_COLOR

    @field_validator("rotation", mode="before")
    @classmethod
    def _rotation_default(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class SeatingArea(_DesignModel):
    kind: ClassVar[ElementKind] = ElementKind.seating_area

    id: str
    name: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    rows: int = Field(default=5, ge=1)
    columns: int = Field(default=8, ge=1)
    seat_price: float = Field(default=50.0, ge=0)
    vip_price: float = Field(default=100.0, ge=0)
    seat_type: SeatType = SeatType.regular
    color: str = AREA_COLOR
    rotation: float = 0.0
    # Sparse: a missing key means the cell inherits seat_type and its price.
    individual_seats: dict[tuple[int, int], SeatOverride] = Field(default_factory=dict)

    @field_validator("rotation", mode="before")
    @classmethod
    def _rotation_default(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("rows", "columns")
    @classmethod
    def _clamp_grid(cls, v: int) -> int:
        max_grid = get_settings().max_grid
        if v > max_grid:
            logger.warning("Clamping seating area grid size %d to %d", v, max_grid)
            return max_grid
        return v

    @field_validator("individual_seats", mode="before")
    @classmethod
    def _parse_seat_keys(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {parse_seat_key(k): seat for k, seat in v.items()}

    @field_serializer("individual_seats")
    def _dump_seat_keys(self, seats: dict[tuple[int, int], SeatOverride]) -> dict[str, SeatOverride]:
        return {format_seat_key(k): seat for k, seat in sorted(seats.items())}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def width(self) -> int:
        return area_dimensions(self.rows, self.columns)[0]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def height(self) -> int:
        return area_dimensions(self.rows, self.columns)[1]


Element = Union[Stage, SeatingArea]


class DesignDocument(_DesignModel):
    canvas_width: int = 800
    canvas_height: int = 600
    floor_label: str = ""
    stages: tuple[Stage, ...] = ()
    seating_areas: tuple[SeatingArea, ...] = ()

    def elements(self, kind: ElementKind) -> tuple[Element, ...]:
        if kind == ElementKind.stage:
            return self.stages
        if kind == ElementKind.seating_area:
            return self.seating_areas
        raise DesignError(f"unknown element kind: {kind!r}")


@dataclass(frozen=True)
class Selection:
    id: str
    kind: ElementKind


@dataclass(frozen=True)
class TransformBox:
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0


def new_element_id(kind: ElementKind) -> str:
    prefix = "stage" if kind == ElementKind.stage else "area"
    return f"{prefix}-{uuid.uuid4().hex}"


def load_document(data: dict) -> DesignDocument:
    """
    Validates a host document. Seating-area rows/columns above the grid
    limit are clamped to it; anything else invalid raises DesignError.
    """
    try:
        return DesignDocument.model_validate(data)
    except ValidationError as e:
        raise DesignError(f"invalid seating design data: {e}") from e


def dump_document(doc: DesignDocument) -> dict:
    return doc.model_dump(mode="json", by_alias=True)
