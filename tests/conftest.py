"""Pytest configuration and fixtures."""

import copy
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from autoscale_rules.config import Settings
from autoscale_rules.config_source import MappingConfigSource
from autoscale_rules.repositories.rule import AutoScaleRuleRepository
from autoscale_rules.repositories.store import SQLAlchemyRuleStore
from autoscale_rules.services.legacy import LegacyRuleProvider
from autoscale_rules.services.normalizer import RuleNormalizer

# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_COLLECTION = "test_auto_scale_rule"

SCHEDULER_CONFIG: dict[str, Any] = {
    "docker": {
        "scheduler": {
            "total-memory-metadata": "memory",
            "max-used-memory": 0.8,
        },
        "auto-scale": {
            "metadata-filter": "pool=legacy",
            "max-container-count": 10,
            "prevent-rebalance": True,
        },
    },
}


def get_test_settings(**overrides: Any) -> Settings:
    """Settings for testing."""
    values: dict[str, Any] = {
        "database_url": TEST_DATABASE_URL,
        "environment": "test",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def scheduler_config() -> dict[str, Any]:
    """Mutable copy of the scheduler configuration."""
    return copy.deepcopy(SCHEDULER_CONFIG)


@pytest.fixture
def config_source(scheduler_config) -> MappingConfigSource:
    """ConfigSource backed by the scheduler configuration."""
    return MappingConfigSource(scheduler_config)


@pytest.fixture
def empty_config_source() -> MappingConfigSource:
    """ConfigSource with nothing configured."""
    return MappingConfigSource()


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def rule_store(test_engine) -> SQLAlchemyRuleStore:
    """SQLite-backed rule store with its collection created."""
    store = SQLAlchemyRuleStore(test_engine, TEST_COLLECTION, metadata=MetaData())
    await store.create_collection()
    return store


@pytest.fixture
def rule_repository(rule_store, config_source) -> AutoScaleRuleRepository:
    """Repository over the SQLite store and the scheduler configuration."""
    return AutoScaleRuleRepository(
        store=rule_store,
        legacy_provider=LegacyRuleProvider(config_source),
        normalizer=RuleNormalizer(config_source),
    )
