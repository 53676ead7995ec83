"""Repository for auto-scale rule access."""

from autoscale_rules.exceptions import NotFoundError, RuleValidationError
from autoscale_rules.logging_config import get_logger
from autoscale_rules.models.rule import AutoScaleRule, sort_rules
from autoscale_rules.repositories.store import RuleStore
from autoscale_rules.services.legacy import LegacyRuleProvider
from autoscale_rules.services.normalizer import RuleNormalizer

logger = get_logger(__name__)

RESOURCE_TYPE = "auto-scale rule"


class AutoScaleRuleRepository:
    """Effective auto-scale rules: stored rules plus the legacy rule.

    The legacy rule takes part in reads only while no stored rule shares its
    metadata filter, and it is never written to the store.
    """

    def __init__(
        self,
        store: RuleStore,
        legacy_provider: LegacyRuleProvider,
        normalizer: RuleNormalizer,
    ):
        self.store = store
        self.legacy_provider = legacy_provider
        self.normalizer = normalizer

    async def update(self, rule: AutoScaleRule) -> AutoScaleRule:
        """Normalize and store a rule, replacing any rule with the same filter."""
        self.normalizer.normalize(rule)
        await self.store.upsert(rule.metadata_filter, rule.to_document())
        logger.info("Auto-scale rule updated", metadata_filter=rule.metadata_filter)
        return rule

    async def list(self) -> list[AutoScaleRule]:
        """
        Get all effective rules ordered by metadata filter.

        Invalid rules are still returned, with ``error`` set.
        """
        documents = await self.store.find_all()
        rules = [AutoScaleRule.from_document(key, doc) for key, doc in documents]

        legacy_rule = self.legacy_provider.legacy_rule()
        if not any(rule.metadata_filter == legacy_rule.metadata_filter for rule in rules):
            rules.append(legacy_rule)

        for rule in rules:
            try:
                self.normalizer.normalize(rule)
            except RuleValidationError as e:
                logger.warning(
                    "Invalid auto-scale rule",
                    metadata_filter=rule.metadata_filter,
                    error=e.message,
                )

        return sort_rules(rules)

    async def get(self, metadata_filter: str) -> AutoScaleRule:
        """
        Get the effective rule for a metadata filter.

        Raises:
            NotFoundError: Neither a stored rule nor the legacy rule matches.
            RuleValidationError: The matching rule is invalid.
        """
        document = await self.store.find_by_key(metadata_filter)
        if document is not None:
            rule = AutoScaleRule.from_document(metadata_filter, document)
        else:
            rule = self.legacy_provider.legacy_rule()
            if rule.metadata_filter != metadata_filter:
                raise NotFoundError(RESOURCE_TYPE, metadata_filter)
            logger.debug("Using legacy auto-scale rule", metadata_filter=metadata_filter)

        self.normalizer.normalize(rule)
        return rule

    async def delete(self, metadata_filter: str) -> None:
        """Delete a stored rule. The legacy rule cannot be deleted."""
        await self.store.delete_by_key(metadata_filter)
        logger.info("Auto-scale rule deleted", metadata_filter=metadata_filter)
