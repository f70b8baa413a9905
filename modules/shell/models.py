from typing import Literal

View = Literal["home", "report", "map"]

VIEWS = ("home", "report", "map")

APP_TITLE = "Clean Water Alert"

NAV_ITEMS = (
    ("home", "Home"),
    ("map", "Map View"),
    ("report", "Report Issue"),
)

FOOTER = "Clean Water Alert System - Report and track water supply issues in your community"
