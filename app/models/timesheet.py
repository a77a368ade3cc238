"""Timesheet project export models."""

import datetime as dt
from typing import Optional
from pydantic import Field

from app.models.common import ClientRef, ExportModel


class TimesheetEntry(ExportModel):
    """One logged work entry. total_pay = hours_worked * hourly_rate, computed upstream."""

    date: dt.date
    hours_worked: float = Field(..., ge=0)
    hourly_rate: float = Field(..., ge=0)
    total_pay: float = Field(..., ge=0)
    notes: Optional[str] = None


class DateRange(ExportModel):
    start_date: dt.date
    end_date: dt.date


class TimesheetExportInput(ExportModel):
    """A timesheet project with its entries, as listed on the admin dashboard."""

    project_name: str = Field(..., description="Project name")
    client: Optional[ClientRef] = None
    description: Optional[str] = None
    is_paid: bool = False
    date_range: Optional[DateRange] = None
    entries: list[TimesheetEntry] = Field(default_factory=list)
    total_hours: Optional[float] = None
    total_pay: Optional[float] = None

    def total_hours_value(self) -> float:
        if self.total_hours is not None:
            return self.total_hours
        return sum(entry.hours_worked for entry in self.entries)

    def total_pay_value(self) -> float:
        if self.total_pay is not None:
            return self.total_pay
        return sum(entry.total_pay for entry in self.entries)
