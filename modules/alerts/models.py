from pydantic import BaseModel
from typing import Literal
from uuid import UUID

AlertFilter = Literal["all", "active", "investigating", "resolved"]

FILTERS = ("all", "active", "investigating", "resolved")

class AlertCard(BaseModel):
    id: UUID
    title: str
    description: str
    location: str
    reported_by: str
    status: str
    status_label: str
    status_color: str
    severity: str
    severity_label: str
    severity_color: str
    age: str

class FilterOption(BaseModel):
    value: AlertFilter
    label: str
    count: int
    selected: bool
