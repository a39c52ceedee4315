"""
Data models for form-schema.

This module contains Pydantic models for:
- Form definitions (pages, sections, fields, rules)
- Validation results
"""

from form_schema.models.form_definition import (
    FieldType,
    FormDefinition,
    FormField,
    FormSchema,
    OptionItem,
    OptionProperties,
    Page,
    RuleSpec,
    Section,
)
from form_schema.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Form definition
    "FieldType",
    "FormDefinition",
    "FormField",
    "FormSchema",
    "OptionItem",
    "OptionProperties",
    "Page",
    "RuleSpec",
    "Section",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
