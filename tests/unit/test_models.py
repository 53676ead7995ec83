"""Tests for the auto-scale rule model."""

import pytest

from autoscale_rules.exceptions import StoreError
from autoscale_rules.models.rule import AutoScaleRule, sort_rules


class TestAutoScaleRule:
    """Tests for AutoScaleRule."""

    def test_defaults(self):
        """Test a bare rule is all zero values."""
        rule = AutoScaleRule()

        assert rule.metadata_filter == ""
        assert rule.max_container_count == 0
        assert rule.scale_down_ratio == 0.0
        assert rule.max_memory_ratio == 0.0
        assert rule.enabled is False
        assert rule.prevent_rebalance is False
        assert rule.error is None

    def test_to_document_excludes_key_and_error(self):
        """Test the stored document holds only persisted fields."""
        rule = AutoScaleRule(
            metadata_filter="pool=a",
            max_container_count=5,
            scale_down_ratio=1.5,
            max_memory_ratio=0.8,
            enabled=True,
            prevent_rebalance=True,
            error="invalid rule",
        )

        assert rule.to_document() == {
            "max_container_count": 5,
            "scale_down_ratio": 1.5,
            "max_memory_ratio": 0.8,
            "enabled": True,
            "prevent_rebalance": True,
        }

    def test_error_never_serialized(self):
        """Test error is excluded from every dump."""
        rule = AutoScaleRule(metadata_filter="pool=a", error="invalid rule")

        assert "error" not in rule.model_dump()
        assert "error" not in rule.model_dump_json()

    def test_from_document(self):
        """Test a rule is rebuilt from key and document."""
        rule = AutoScaleRule.from_document(
            "pool=a",
            {"max_container_count": 3, "enabled": True, "legacy_field": "ignored"},
        )

        assert rule.metadata_filter == "pool=a"
        assert rule.max_container_count == 3
        assert rule.enabled is True
        assert rule.error is None
        assert not hasattr(rule, "legacy_field")

    def test_document_key_wins_over_document_field(self):
        """Test the store key is authoritative for metadata_filter."""
        rule = AutoScaleRule.from_document("pool=a", {"metadata_filter": "pool=b"})

        assert rule.metadata_filter == "pool=a"

    def test_malformed_document_raises_store_error(self):
        """Test an invalid stored document is reported as a store failure."""
        with pytest.raises(StoreError) as exc_info:
            AutoScaleRule.from_document("pool=x", {"scale_down_ratio": "steep"})

        assert exc_info.value.error_code == "STORE_ERROR"
        assert exc_info.value.details == {"key": "pool=x"}


class TestSortRules:
    """Tests for rule ordering."""

    def test_sorted_by_metadata_filter(self):
        """Test rules are ordered by metadata filter."""
        rules = [
            AutoScaleRule(metadata_filter="pool=c"),
            AutoScaleRule(metadata_filter=""),
            AutoScaleRule(metadata_filter="pool=a"),
            AutoScaleRule(metadata_filter="pool=B"),
        ]

        result = sort_rules(rules)

        assert [r.metadata_filter for r in result] == ["", "pool=B", "pool=a", "pool=c"]

    def test_input_not_mutated(self):
        """Test sorting returns a new list."""
        rules = [AutoScaleRule(metadata_filter="b"), AutoScaleRule(metadata_filter="a")]

        sort_rules(rules)

        assert [r.metadata_filter for r in rules] == ["b", "a"]
