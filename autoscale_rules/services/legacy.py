"""Implicit rule built from the pre-collection auto-scale settings."""

from autoscale_rules.config_source import ConfigSource
from autoscale_rules.models.rule import AutoScaleRule

METADATA_FILTER_KEY = "docker:auto-scale:metadata-filter"
MAX_CONTAINER_COUNT_KEY = "docker:auto-scale:max-container-count"
SCALE_DOWN_RATIO_KEY = "docker:auto-scale:scale-down-ratio"
PREVENT_REBALANCE_KEY = "docker:auto-scale:prevent-rebalance"


class LegacyRuleProvider:
    """Reads the flat ``docker:auto-scale`` keys into a rule.

    Configuration is read on every call. Missing keys fall back to zero
    values; the result is not normalized here.
    """

    def __init__(self, config: ConfigSource):
        self.config = config

    def legacy_rule(self) -> AutoScaleRule:
        metadata_filter, _ = self.config.get_string(METADATA_FILTER_KEY)
        max_container_count, _ = self.config.get_int(MAX_CONTAINER_COUNT_KEY)
        scale_down_ratio, _ = self.config.get_float(SCALE_DOWN_RATIO_KEY)
        prevent_rebalance, _ = self.config.get_bool(PREVENT_REBALANCE_KEY)
        return AutoScaleRule(
            metadata_filter=metadata_filter,
            max_container_count=max_container_count,
            scale_down_ratio=scale_down_ratio,
            prevent_rebalance=prevent_rebalance,
            enabled=True,
        )
