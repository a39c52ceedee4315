"""
Validation result models.

These models represent the output of schema and submission validation.
"""

import json
from typing import Any

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(..., description="Field key or schema path with the error")
    error_type: str = Field(..., description="Rule name or structural check that failed")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """
    Result of a validation pass.

    ``errors`` maps each field key (submission validation) or dotted schema
    path (schema validation) to one message. ``failures`` keeps the
    matching detail records in the order they were found.
    """

    errors: dict[str, str] = Field(
        default_factory=dict, description="Path or field key to error message"
    )
    failures: list[FieldValidationError] = Field(
        default_factory=list, description="Detail record for each error"
    )

    def is_valid(self) -> bool:
        """Whether the validated input has no errors."""
        return not self.errors

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_error(self, field_name: str) -> str | None:
        """Get the error message for a specific field, if any."""
        return self.errors.get(field_name)

    def to_error_dict(self) -> dict[str, str]:
        """Return a copy of the path-to-message error map."""
        return dict(self.errors)

    def to_json(self) -> str:
        """Serialize the error map, as carried by assert-style exceptions."""
        return json.dumps(self.errors)
