"""Pydantic request models for API endpoints."""

from typing import Annotated

from pydantic import Field, StringConstraints

from .responses import CamelModel
from models.events import ShiftSelection


class ShiftSelectionRequest(CamelModel):
    shift: str = Field(min_length=1)
    date: str = Field(min_length=1)

    def to_selection(self) -> ShiftSelection:
        return ShiftSelection(shift=self.shift, date=self.date)


class AddShiftsRequest(CamelModel):
    """Body of POST /add-shifts."""

    employee_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    shifts: list[ShiftSelectionRequest]
    color_id: str | None = None
