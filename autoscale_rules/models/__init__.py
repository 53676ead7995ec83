"""Data models."""

from autoscale_rules.models.base import JSONType, document_table
from autoscale_rules.models.rule import AutoScaleRule, sort_rules

__all__ = [
    "AutoScaleRule",
    "JSONType",
    "document_table",
    "sort_rules",
]
