"""
Submission validation.

This is the main entry point for validating submitted form data. It
walks the schema in document order, builds each field's effective rule
list and records the first failing rule's message per field key.
"""

import logging
from dataclasses import replace
from typing import Any, Iterator, Mapping

from form_schema.config import FormSchemaConfig, get_config
from form_schema.constants import FILE_TYPES, LAYOUT_TYPES, LOGGER_NAME
from form_schema.errors import InvalidSubmissionError
from form_schema.models.form_definition import FormField
from form_schema.models.validation_result import FieldValidationError, ValidationResult
from form_schema.rules import DEFAULT_REGISTRY, conditional
from form_schema.rules.derive import derive_rules
from form_schema.rules.files import drop_empty_uploads
from form_schema.rules.registry import Rule, RuleRegistry, SubmissionContext
from form_schema.tracing import trace_validation

logger = logging.getLogger(LOGGER_NAME)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def iter_schema_fields(schema: Any) -> Iterator[tuple[str, dict[str, Any]]]:
    """
    Yield ``(path, field)`` for every field mapping in document order.

    Containers that are missing or not lists are skipped; reporting
    them is the schema validator's job.
    """
    form = schema.get("form") if isinstance(schema, dict) else None
    if not isinstance(form, dict):
        return

    for pi, page in enumerate(_as_list(form.get("pages"))):
        if not isinstance(page, dict):
            continue
        for si, section in enumerate(_as_list(page.get("sections"))):
            if not isinstance(section, dict):
                continue
            for fi, field in enumerate(_as_list(section.get("fields"))):
                if isinstance(field, dict):
                    yield f"form.pages[{pi}].sections[{si}].fields[{fi}]", field


class SubmissionValidator:
    """
    Validates submitted data against a form schema.

    Usage:
        validator = SubmissionValidator()
        result = validator.validate(schema, {"name": "Ada"})
        if not result.is_valid():
            print(result.errors)

    A validator holds no per-call state and can be shared between threads.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: FormSchemaConfig | None = None,
    ):
        """
        Initialize the validator.

        Args:
            registry: Rule registry to dispatch through. Defaults to the built-in rules.
            config: Settings snapshot. If None, copies the current global configuration.
        """
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.config = replace(config or get_config())

    @trace_validation("submission")
    def validate(
        self,
        schema: Any,
        payload: Mapping[str, Any] | None = None,
        replacements: Mapping[str, Any] | None = None,
    ) -> ValidationResult:
        """
        Validate a submission payload against a schema.

        Args:
            schema: Form schema, ``{"form": {"pages": [...]}}``.
            payload: Submitted values keyed by field key.
            replacements: Contextual values overlaid on the payload; they win on key collisions.

        Returns:
            ValidationResult keyed by field key.
        """
        context = SubmissionContext(payload, replacements)
        errors: dict[str, str] = {}
        failures: list[FieldValidationError] = []

        for path, raw_field in iter_schema_fields(schema):
            key = raw_field.get("key")
            if not isinstance(key, str) or key == "":
                errors[f"{path}.key"] = "Field key is required."
                failures.append(
                    FieldValidationError(
                        field_name=f"{path}.key",
                        error_type="key",
                        message="Field key is required.",
                    )
                )
                continue

            if key in errors:
                continue

            failure = self.validate_field(FormField.from_raw(raw_field), context)
            if failure is not None:
                errors[key] = failure.message
                failures.append(failure)

        return ValidationResult(errors=errors, failures=failures)

    def assert_valid(
        self,
        schema: Any,
        payload: Mapping[str, Any] | None = None,
        replacements: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Validate a submission and raise if it is invalid.

        Raises:
            InvalidSubmissionError: carrying the full error map.
        """
        result = self.validate(schema, payload, replacements)
        if result.is_valid():
            return
        raise InvalidSubmissionError(result.errors)

    def effective_rules(self, field: FormField) -> list[Rule]:
        """``required`` (if set), then derived constraint rules, then the declared validations."""
        rules: list[Rule] = []
        if field.required:
            rules.append(Rule.of("required", message=self.config.required_message))
        rules.extend(derive_rules(field, step_tolerance=self.config.step_tolerance))
        for spec in field.validations:
            rule = self.registry.rule_from_spec(spec)
            if rule.message is None and self.registry.get(rule.name) in conditional.RULES:
                rule = replace(rule, message=self.config.required_message)
            rules.append(rule)
        return rules

    def validate_field(self, field: FormField, context: SubmissionContext) -> FieldValidationError | None:
        """Evaluate a field's rules in order and return the first failure, if any."""
        if field.type in LAYOUT_TYPES:
            return None

        value = context.get(field.key)
        if field.type in FILE_TYPES:
            value = drop_empty_uploads(value)

        for rule in self.effective_rules(field):
            message = self.registry.evaluate(
                rule, value, context, fallback_message=self.config.fallback_message
            )
            if message is None:
                continue

            logger.debug(f"Field '{field.key}' failed rule '{rule.name}': {message}")
            return FieldValidationError(
                field_name=field.key,
                error_type=rule.name,
                message=message,
                received=value,
            )

        return None


def validate_submission(
    schema: Any,
    payload: Mapping[str, Any] | None = None,
    replacements: Mapping[str, Any] | None = None,
) -> ValidationResult:
    """
    Convenience function to validate a submission with the built-in rules.

    Example:
        >>> from form_schema import validate_submission
        >>> result = validate_submission(schema, {"amount": 12})
        >>> result.is_valid()
        True
    """
    return SubmissionValidator().validate(schema, payload, replacements)


def assert_valid_submission(
    schema: Any,
    payload: Mapping[str, Any] | None = None,
    replacements: Mapping[str, Any] | None = None,
) -> None:
    """Validate a submission, raising InvalidSubmissionError if it is invalid."""
    SubmissionValidator().assert_valid(schema, payload, replacements)
