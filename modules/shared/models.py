from pydantic import BaseModel
from typing import Literal, Optional
from uuid import UUID
from datetime import datetime

Status = Literal["active", "investigating", "resolved"]
Severity = Literal["low", "medium", "high", "critical"]

STATUSES = ("active", "investigating", "resolved")
SEVERITIES = ("low", "medium", "high", "critical")

class Report(BaseModel):
    id: UUID
    title: str
    description: str
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: Status = "active"
    severity: Severity
    reported_by: str
    contact_info: Optional[str] = None
    created_at: datetime
    updated_at: datetime
