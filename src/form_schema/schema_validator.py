"""
Structural validation of form schemas.

Checks that the schema has the shape ``form → pages → sections →
fields``, that pages, sections and fields carry keys, that every field
type is known, and that options fields declare their options. Errors
are keyed by dotted, indexed schema paths such as
``form.pages[0].sections[0].fields[0].type``.
"""

from typing import Any

from form_schema.constants import ALLOWED_FIELD_TYPES
from form_schema.errors import InvalidSchemaError
from form_schema.models.form_definition import FieldType
from form_schema.models.validation_result import FieldValidationError, ValidationResult
from form_schema.rules.values import is_empty
from form_schema.tracing import trace_validation


class _ErrorCollector:
    def __init__(self):
        self.errors: dict[str, str] = {}
        self.failures: list[FieldValidationError] = []

    def add(self, path: str, check: str, message: str, received: Any = None) -> None:
        if path in self.errors:
            return
        self.errors[path] = message
        self.failures.append(
            FieldValidationError(field_name=path, error_type=check, message=message, received=received)
        )

    def result(self) -> ValidationResult:
        return ValidationResult(errors=self.errors, failures=self.failures)


def _has_options(field: dict[str, Any]) -> bool:
    options = field.get("option_properties")
    if not isinstance(options, dict):
        return False
    data = options.get("data")
    return isinstance(data, (list, dict)) and len(data) > 0


class SchemaValidator:
    """Validates the structure of a form schema."""

    @trace_validation("schema")
    def validate(self, schema: Any) -> ValidationResult:
        collector = _ErrorCollector()

        form = schema.get("form") if isinstance(schema, dict) else None
        if not isinstance(form, dict):
            collector.add("form", "form", "Schema must include a form object.")
            return collector.result()

        pages = form.get("pages")
        if not isinstance(pages, list) or not pages:
            collector.add("form.pages", "pages", "Form must include at least one page.", pages)
            return collector.result()

        for index, page in enumerate(pages):
            self._validate_page(collector, page, f"form.pages[{index}]")

        return collector.result()

    def assert_valid(self, schema: Any) -> None:
        """
        Validate a schema and raise if it is invalid.

        Raises:
            InvalidSchemaError: carrying the full error map.
        """
        result = self.validate(schema)
        if result.is_valid():
            return
        raise InvalidSchemaError(result.errors)

    def _validate_page(self, collector: _ErrorCollector, page: Any, path: str) -> None:
        if not isinstance(page, dict):
            collector.add(path, "page", "Page must be an object.", page)
            return

        if is_empty(page.get("key")):
            collector.add(f"{path}.key", "key", "Page key is required.")

        sections = page.get("sections")
        if not isinstance(sections, list):
            collector.add(f"{path}.sections", "sections", "Sections must be an array.", sections)
            return

        for index, section in enumerate(sections):
            self._validate_section(collector, section, f"{path}.sections[{index}]")

    def _validate_section(self, collector: _ErrorCollector, section: Any, path: str) -> None:
        if not isinstance(section, dict):
            collector.add(path, "section", "Section must be an object.", section)
            return

        if is_empty(section.get("key")):
            collector.add(f"{path}.key", "key", "Section key is required.")

        fields = section.get("fields")
        if not isinstance(fields, list):
            collector.add(f"{path}.fields", "fields", "Fields must be an array.", fields)
            return

        for index, field in enumerate(fields):
            self._validate_field(collector, field, f"{path}.fields[{index}]")

    def _validate_field(self, collector: _ErrorCollector, field: Any, path: str) -> None:
        if not isinstance(field, dict):
            collector.add(path, "field", "Field must be an object.", field)
            return

        if is_empty(field.get("key")):
            collector.add(f"{path}.key", "key", "Field key is required.")

        field_type = field.get("type")
        if not isinstance(field_type, str) or field_type not in ALLOWED_FIELD_TYPES:
            collector.add(f"{path}.type", "type", "Field type is invalid or missing.", field_type)

        if field_type == FieldType.OPTIONS.value and not _has_options(field):
            collector.add(
                f"{path}.option_properties.data",
                "option_properties",
                "Options field requires option_properties.data.",
            )


def validate_schema(schema: Any) -> ValidationResult:
    """Validate the structure of a form schema."""
    return SchemaValidator().validate(schema)


def assert_valid_schema(schema: Any) -> None:
    """Validate a form schema, raising InvalidSchemaError if it is invalid."""
    SchemaValidator().assert_valid(schema)
