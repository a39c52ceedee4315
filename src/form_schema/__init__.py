"""
form-schema: Declarative form schema and submission validation.

Validate the structure of a form schema, then validate submitted data
against it. Each field's type and constraints imply rules, and fields
can declare further named rules with parameters and custom messages.

Simple Usage:
    from form_schema import validate_schema, validate_submission

    schema = {
        "form": {
            "pages": [{
                "key": "page_1",
                "sections": [{
                    "key": "section_1",
                    "fields": [
                        {"key": "amount", "type": "number",
                         "constraints": {"min": 10, "max": 1000, "step": 2}},
                    ],
                }],
            }],
        }
    }

    validate_schema(schema).is_valid()                   # True
    validate_submission(schema, {"amount": 13}).errors   # {"amount": "..."}

Advanced Usage:
    from form_schema import SubmissionValidator, DEFAULT_REGISTRY, RuleDefinition

    def even(value, params, context):
        return None if int(value) % 2 == 0 else "This field must be even."

    validator = SubmissionValidator(
        registry=DEFAULT_REGISTRY.with_rules(RuleDefinition("even", even)),
    )
    result = validator.validate(schema, payload, replacements={"user_id": 42})

Tracing:
    from form_schema.tracing import setup_tracing

    # Print a line per validation pass
    setup_tracing(console=True)

    # Or write every record to a file
    setup_tracing(console=False, verbose=True, file_path="traces.jsonl")
"""

from form_schema.errors import (
    FormSchemaError,
    InvalidSchemaError,
    InvalidSubmissionError,
    RuleParameterError,
)
from form_schema.models import (
    FieldType,
    FieldValidationError,
    FormField,
    FormSchema,
    RuleSpec,
    ValidationResult,
)
from form_schema.rules import (
    DEFAULT_REGISTRY,
    Rule,
    RuleDefinition,
    RuleRegistry,
    SubmissionContext,
)
from form_schema.schema_validator import (
    SchemaValidator,
    assert_valid_schema,
    validate_schema,
)
from form_schema.submission import (
    SubmissionValidator,
    assert_valid_submission,
    validate_submission,
)
from form_schema.tracing import (
    configure_from_config,
    disable_tracing,
    enable_tracing,
    setup_tracing,
)

configure_from_config()

__all__ = [
    # Main interface
    "validate_schema",
    "assert_valid_schema",
    "validate_submission",
    "assert_valid_submission",
    "SchemaValidator",
    "SubmissionValidator",
    # Models
    "FieldType",
    "FormField",
    "FormSchema",
    "RuleSpec",
    "ValidationResult",
    "FieldValidationError",
    # Rules
    "DEFAULT_REGISTRY",
    "Rule",
    "RuleDefinition",
    "RuleRegistry",
    "SubmissionContext",
    # Errors
    "FormSchemaError",
    "InvalidSchemaError",
    "InvalidSubmissionError",
    "RuleParameterError",
    # Tracing
    "setup_tracing",
    "disable_tracing",
    "enable_tracing",
]

__version__ = "0.1.0"
