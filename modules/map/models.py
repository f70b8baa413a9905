from pydantic import BaseModel
from typing import List
from uuid import UUID

from modules.shared.models import Report

class LocationGroup(BaseModel):
    location: str
    reports: List[Report]
    active_count: int
    total_count: int

class StatusBadge(BaseModel):
    id: UUID
    status: str
    color: str

class ReportDetail(BaseModel):
    id: UUID
    title: str
    description: str
    location: str
    status: str
    status_color: str
    severity: str
    severity_color: str
    reported_by: str
    date: str
