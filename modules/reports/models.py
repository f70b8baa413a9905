from pydantic import BaseModel, Field
from typing import Optional

from modules.shared.models import Severity

FORM_FIELDS = ("title", "description", "location", "severity", "reported_by", "contact_info")
REQUIRED_FIELDS = ("title", "description", "location", "reported_by")

SEVERITY_OPTIONS = (
    ("low", "Low - Minor inconvenience"),
    ("medium", "Medium - Noticeable impact"),
    ("high", "High - Significant disruption"),
    ("critical", "Critical - Emergency situation"),
)

class ReportSubmit(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    severity: Severity = "medium"
    reported_by: str = Field(..., min_length=1)
    contact_info: Optional[str] = ""
