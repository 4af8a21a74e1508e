"""Tests for flat DataFrame conversion."""

from __future__ import annotations

import pandas as pd
import pytest

from budget_engine.core.frames import FRAME_COLUMNS, tree_from_frame, tree_to_frame
from budget_engine.core.line_items import TreeStructureError
from budget_engine.services.aggregator import aggregate


class TestTreeToFrame:
    def test_columns_and_order(self, sample_tree):
        df = tree_to_frame(sample_tree)
        assert list(df.columns) == FRAME_COLUMNS
        assert list(df["id"]) == ["electronics", "phones", "laptops", "furniture", "tables", "chairs"]
        assert list(df["depth"]) == [0, 1, 1, 0, 1, 1]
        assert list(df["position"]) == [0, 0, 1, 1, 0, 1]

    def test_parent_ids(self, three_level_tree):
        df = tree_to_frame(three_level_tree).set_index("id")
        assert df.loc["company", "parent_id"] is None
        assert df.loc["engineering", "parent_id"] == "company"
        assert df.loc["frontend", "parent_id"] == "engineering"
        assert df.loc["ops", "parent_id"] == "company"

    def test_aggregated_tree_adds_variance(self, sample_tree):
        df = tree_to_frame(aggregate(sample_tree))
        assert "variance" in df.columns
        assert (df["variance"] == 0.0).all()

    def test_empty_tree(self):
        df = tree_to_frame(())
        assert df.empty
        assert list(df.columns) == FRAME_COLUMNS


class TestTreeFromFrame:
    def test_round_trip(self, three_level_tree):
        assert tree_from_frame(tree_to_frame(three_level_tree)) == three_level_tree

    def test_sibling_order_follows_position(self):
        df = pd.DataFrame([
            {"id": "root", "parent_id": None, "label": "Root", "value": 0, "position": 0},
            {"id": "b", "parent_id": "root", "label": "B", "value": 2, "position": 1},
            {"id": "a", "parent_id": "root", "label": "A", "value": 1, "position": 0},
        ])
        (root,) = tree_from_frame(df)
        assert [c.id for c in root.children] == ["a", "b"]

    def test_missing_baseline_defaults_to_value(self):
        df = pd.DataFrame([{"id": "a", "label": "A", "value": 5.0}])
        (item,) = tree_from_frame(df)
        assert item.original_value == 5.0

    def test_duplicate_ids_rejected(self):
        df = pd.DataFrame([
            {"id": "a", "parent_id": None, "label": "A", "value": 1},
            {"id": "a", "parent_id": None, "label": "A again", "value": 2},
        ])
        with pytest.raises(TreeStructureError, match="Duplicate"):
            tree_from_frame(df)

    def test_unknown_parent_rejected(self):
        df = pd.DataFrame([{"id": "a", "parent_id": "ghost", "label": "A", "value": 1}])
        with pytest.raises(TreeStructureError, match="Unknown parent"):
            tree_from_frame(df)

    def test_parent_cycle_rejected(self):
        df = pd.DataFrame([
            {"id": "root", "parent_id": None, "label": "Root", "value": 1},
            {"id": "a", "parent_id": "b", "label": "A", "value": 1},
            {"id": "b", "parent_id": "a", "label": "B", "value": 1},
        ])
        with pytest.raises(TreeStructureError, match="cycle"):
            tree_from_frame(df)

    def test_missing_columns_rejected(self):
        with pytest.raises(TreeStructureError, match="Missing columns"):
            tree_from_frame(pd.DataFrame([{"id": "a"}]))
