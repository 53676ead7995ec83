"""Repository layer for auto-scale rule access."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from autoscale_rules.config import Settings, get_settings
from autoscale_rules.config_source import ConfigSource, load_config_source
from autoscale_rules.database import get_engine
from autoscale_rules.repositories.rule import AutoScaleRuleRepository
from autoscale_rules.repositories.store import RuleStore, SQLAlchemyRuleStore
from autoscale_rules.services.legacy import LegacyRuleProvider
from autoscale_rules.services.normalizer import RuleNormalizer


def build_rule_repository(
    settings: Optional[Settings] = None,
    config: Optional[ConfigSource] = None,
    engine: Optional[AsyncEngine] = None,
) -> AutoScaleRuleRepository:
    """Wire a repository from settings, scheduler configuration and an engine."""
    settings = settings or get_settings()
    if config is None:
        config = load_config_source(settings)
    store = SQLAlchemyRuleStore(engine or get_engine(), settings.rule_collection_name)
    return AutoScaleRuleRepository(
        store=store,
        legacy_provider=LegacyRuleProvider(config),
        normalizer=RuleNormalizer(config),
    )


__all__ = [
    "AutoScaleRuleRepository",
    "RuleStore",
    "SQLAlchemyRuleStore",
    "build_rule_repository",
]
