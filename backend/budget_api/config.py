"""Presentation constants and environment-driven settings."""

from __future__ import annotations

import os

# Dev frontends on common Vite/React ports. Extra origins (e.g. a desktop
# webview) come from BUDGET_CORS_ORIGINS, comma separated.
DEFAULT_CORS_ORIGINS = [
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
CORS_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


def cors_origins() -> list[str]:
    extra = os.environ.get("BUDGET_CORS_ORIGINS", "")
    return DEFAULT_CORS_ORIGINS + [o.strip() for o in extra.split(",") if o.strip()]


# Amounts and variances are shown with two decimals.
DISPLAY_DECIMALS = 2

# Input placeholder per row: top-level rows take percentages, sub-items values.
TOP_LEVEL_PLACEHOLDER = "%"
NESTED_PLACEHOLDER = "val"

GRAND_TOTAL_LABEL = "Grand Total"

# Column order for the .xlsx export.
_EXPORT_COLUMNS = [
    ("label", "Label"),
    ("depth", "Level"),
    ("value", "Value"),
    ("original_value", "Original Value"),
    ("variance", "Variance %"),
]
