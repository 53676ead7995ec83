"""Exception hierarchy for auto-scale rule management."""

from typing import Optional


class AutoScaleRuleError(Exception):
    """Base exception for auto-scale rule operations."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(message)


class RuleValidationError(AutoScaleRuleError):
    """A rule failed normalization."""

    def __init__(self, message: str, metadata_filter: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"metadata_filter": metadata_filter},
        )
        self.metadata_filter = metadata_filter


class NotFoundError(AutoScaleRuleError):
    """Resource not found."""

    def __init__(self, resource_type: str, identifier: str):
        super().__init__(
            message=f"{resource_type} not found: {identifier}",
            error_code="NOT_FOUND",
            details={"resource_type": resource_type, "identifier": identifier},
        )
        self.resource_type = resource_type
        self.identifier = identifier


class StoreError(AutoScaleRuleError):
    """Underlying persistence failure. Never retried here."""

    def __init__(self, message: str = "Store operation failed", details: Optional[dict] = None):
        super().__init__(
            message=message,
            error_code="STORE_ERROR",
            details=details,
        )
