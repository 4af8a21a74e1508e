"""
Default budget loaded into every new session.

Declared as plain records so it can be changed without touching the engine.
Baselines equal the starting values; internal baselines are set
independently of their children.
"""

from __future__ import annotations

from typing import Any

SAMPLE_BUDGET: tuple[dict[str, Any], ...] = (
    {
        "id": "electronics",
        "label": "Electronics",
        "value": 1500.0,
        "originalValue": 1500.0,
        "children": [
            {"id": "phones", "label": "Phones", "value": 800.0, "originalValue": 800.0},
            {"id": "laptops", "label": "Laptops", "value": 700.0, "originalValue": 700.0},
        ],
    },
    {
        "id": "furniture",
        "label": "Furniture",
        "value": 1000.0,
        "originalValue": 1000.0,
        "children": [
            {"id": "tables", "label": "Tables", "value": 300.0, "originalValue": 300.0},
            {"id": "chairs", "label": "Chairs", "value": 700.0, "originalValue": 700.0},
        ],
    },
)
