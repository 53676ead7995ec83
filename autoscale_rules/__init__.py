"""Auto-scale rule management for container host pools.

Processes embedding the library configure logging and check settings once at
startup, before wiring a repository::

    configure_logging()
    validate_config(get_settings(), strict=True)
    repo = build_rule_repository()
"""

from autoscale_rules.config import ConfigurationError, get_settings, validate_config
from autoscale_rules.exceptions import (
    AutoScaleRuleError,
    NotFoundError,
    RuleValidationError,
    StoreError,
)
from autoscale_rules.logging_config import configure_logging, get_logger
from autoscale_rules.models.rule import AutoScaleRule
from autoscale_rules.repositories import AutoScaleRuleRepository, build_rule_repository

__version__ = "0.1.0"

__all__ = [
    "AutoScaleRule",
    "AutoScaleRuleError",
    "AutoScaleRuleRepository",
    "ConfigurationError",
    "NotFoundError",
    "RuleValidationError",
    "StoreError",
    "build_rule_repository",
    "configure_logging",
    "get_logger",
    "get_settings",
    "validate_config",
]
