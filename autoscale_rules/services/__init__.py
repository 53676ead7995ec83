"""Rule services."""

from autoscale_rules.services.legacy import LegacyRuleProvider
from autoscale_rules.services.normalizer import DEFAULT_SCALE_DOWN_RATIO, RuleNormalizer

__all__ = [
    "DEFAULT_SCALE_DOWN_RATIO",
    "LegacyRuleProvider",
    "RuleNormalizer",
]
