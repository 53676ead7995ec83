"""Auto-scale rule model."""

from collections.abc import Iterable
from operator import attrgetter
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autoscale_rules.exceptions import StoreError


class AutoScaleRule(BaseModel):
    """Scaling thresholds for the hosts matched by a metadata filter.

    ``metadata_filter`` is the storage key. ``error`` only reports the outcome
    of the latest normalization and is never serialized.
    """

    model_config = ConfigDict(extra="ignore")

    metadata_filter: str = ""
    max_container_count: int = 0
    scale_down_ratio: float = 0.0
    max_memory_ratio: float = 0.0
    enabled: bool = False
    prevent_rebalance: bool = False

    error: Optional[str] = Field(default=None, exclude=True)

    def to_document(self) -> dict[str, Any]:
        """Stored representation, keyed separately by metadata_filter."""
        return self.model_dump(exclude={"metadata_filter"})

    @classmethod
    def from_document(cls, key: str, document: dict[str, Any]) -> "AutoScaleRule":
        """Rebuild a rule from its store key and document.

        Raises:
            StoreError: The stored document is not a valid rule.
        """
        try:
            return cls.model_validate({**document, "metadata_filter": key})
        except ValidationError as e:
            raise StoreError(
                f"Stored auto-scale rule {key!r} is malformed: {e}",
                details={"key": key},
            ) from e


def sort_rules(rules: Iterable[AutoScaleRule]) -> list[AutoScaleRule]:
    """Order rules by metadata filter."""
    return sorted(rules, key=attrgetter("metadata_filter"))
