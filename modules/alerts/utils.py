from datetime import datetime
from typing import Dict, List, Optional, Sequence

from modules.shared.models import Report, STATUSES
from modules.shared.utils import SEVERITY_COLORS, STATUS_COLORS, format_relative_time, pluralize
from .models import AlertCard, FILTERS


def filter_reports(reports: Sequence[Report], status_filter: str) -> List[Report]:
    """Reports matching the filter; "all" keeps everything."""
    if status_filter == "all":
        return list(reports)
    return [r for r in reports if r.status == status_filter]


def status_counts(reports: Sequence[Report]) -> Dict[str, int]:
    counts = {"all": len(reports)}
    for status in STATUSES:
        counts[status] = sum(1 for r in reports if r.status == status)
    return counts


def empty_message(status_filter: str) -> str:
    if status_filter == "all":
        return "No water issues reported yet."
    return f"No {status_filter} reports found."


def active_summary(active_count: int) -> Optional[str]:
    if active_count <= 0:
        return None
    return pluralize(active_count, "active alert")


def render_card(report: Report, now: Optional[datetime] = None) -> AlertCard:
    """Display values for one report."""
    return AlertCard(
        id=report.id,
        title=report.title,
        description=report.description,
        location=report.location,
        reported_by=report.reported_by,
        status=report.status,
        status_label=report.status.capitalize(),
        status_color=STATUS_COLORS[report.status],
        severity=report.severity,
        severity_label=f"{report.severity.capitalize()} severity",
        severity_color=SEVERITY_COLORS[report.severity],
        age=format_relative_time(report.created_at, now),
    )


def is_valid_filter(value: str) -> bool:
    return value in FILTERS
