"""Defaulting and validation for auto-scale rules."""

from autoscale_rules.config_source import ConfigSource
from autoscale_rules.exceptions import RuleValidationError
from autoscale_rules.models.rule import AutoScaleRule

DEFAULT_SCALE_DOWN_RATIO = 1.333

MAX_USED_MEMORY_KEY = "docker:scheduler:max-used-memory"
TOTAL_MEMORY_METADATA_KEY = "docker:scheduler:total-memory-metadata"


class RuleNormalizer:
    """
    Fills in defaults and checks that a rule can drive scaling decisions.

    The same normalization runs before a rule is written and whenever a rule
    is read back, so stored and listed rules carry identical effective values.
    """

    def __init__(self, config: ConfigSource):
        self.config = config

    def normalize(self, rule: AutoScaleRule) -> None:
        """
        Normalize ``rule`` in place.

        Raises:
            RuleValidationError: The rule is invalid; the message is also
                recorded on ``rule.error``.
        """
        rule.error = None

        if rule.scale_down_ratio == 0.0:
            rule.scale_down_ratio = DEFAULT_SCALE_DOWN_RATIO
        elif not rule.scale_down_ratio > 1.0:
            self._fail(
                rule,
                "invalid rule, scale down ratio must be greater than 1.0, "
                f"got {rule.scale_down_ratio:f}",
            )

        if rule.max_memory_ratio == 0.0:
            rule.max_memory_ratio, _ = self.config.get_float(MAX_USED_MEMORY_KEY)

        total_memory_metadata, _ = self.config.get_string(TOTAL_MEMORY_METADATA_KEY)
        if (
            rule.enabled
            and rule.max_container_count <= 0
            and (not total_memory_metadata or rule.max_memory_ratio <= 0)
        ):
            self._fail(
                rule,
                "invalid rule, either memory information or max container count must be set",
            )

    @staticmethod
    def _fail(rule: AutoScaleRule, message: str) -> None:
        rule.error = message
        raise RuleValidationError(message, metadata_filter=rule.metadata_filter)
