from typing import Dict, List


def empty_fields() -> Dict[str, str]:
    return {
        "title": "",
        "description": "",
        "location": "",
        "severity": "medium",
        "reported_by": "",
        "contact_info": "",
    }


def missing_fields(fields: Dict[str, str], required) -> List[str]:
    """Required fields left empty. Whitespace counts as a value, as with native form constraints."""
    return [name for name in required if not fields.get(name)]


def build_insert_payload(fields: Dict[str, str]) -> dict:
    """Row for the store: new reports always start active and blank contact info is stored as null."""
    return {
        "title": fields["title"],
        "description": fields["description"],
        "location": fields["location"],
        "severity": fields["severity"],
        "reported_by": fields["reported_by"],
        "contact_info": fields.get("contact_info") or None,
        "status": "active",
    }
