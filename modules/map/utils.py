from typing import Dict, List, Optional, Sequence

from modules.shared.models import Report
from modules.shared.utils import SEVERITY_COLORS, STATUS_COLORS, format_date, pluralize
from .models import LocationGroup, ReportDetail, StatusBadge

MAX_BADGES = 3

# Largest location that still counts as an array index when ordering groups
MAX_INDEX_KEY = 2 ** 32 - 2


def index_key(location: str) -> Optional[int]:
    """Return the location as an integer if it is a canonical array index ("0", "12"; not "012")."""
    if not location.isascii() or not location.isdigit():
        return None
    if len(location) > 1 and location[0] == "0":
        return None
    value = int(location)
    return value if value <= MAX_INDEX_KEY else None


def group_by_location(reports: Sequence[Report]) -> List[LocationGroup]:
    """
    Partition reports by exact location string.

    Keys are compared verbatim (case-sensitive, untrimmed). Purely numeric
    locations such as "12" come first in ascending numeric order, the rest
    follow in order of first appearance. Members keep their input order.
    """
    grouped: Dict[str, List[Report]] = {}
    for report in reports:
        grouped.setdefault(report.location, []).append(report)

    numeric = sorted((loc for loc in grouped if index_key(loc) is not None), key=index_key)
    named = [loc for loc in grouped if index_key(loc) is None]
    grouped = {loc: grouped[loc] for loc in numeric + named}

    return [
        LocationGroup(
            location=location,
            reports=members,
            active_count=sum(1 for r in members if r.status == "active"),
            total_count=len(members),
        )
        for location, members in grouped.items()
    ]


def render_group(group: LocationGroup) -> dict:
    hidden = group.total_count - MAX_BADGES
    return {
        "location": group.location,
        "summary": pluralize(group.total_count, "report"),
        "active_count": group.active_count,
        "total_count": group.total_count,
        "badges": [
            StatusBadge(id=r.id, status=r.status, color=STATUS_COLORS[r.status])
            for r in group.reports[:MAX_BADGES]
        ],
        "more": f"+{hidden} more" if hidden > 0 else None,
    }


def render_detail(report: Report) -> ReportDetail:
    return ReportDetail(
        id=report.id,
        title=report.title,
        description=report.description,
        location=report.location,
        status=report.status,
        status_color=STATUS_COLORS[report.status],
        severity=report.severity,
        severity_color=SEVERITY_COLORS[report.severity],
        reported_by=report.reported_by,
        date=format_date(report.created_at),
    )
