"""
Rule evaluation engine.

``DEFAULT_REGISTRY`` holds every built-in rule. It is immutable; use
``DEFAULT_REGISTRY.with_rules(...)`` to build a registry with extra or
replacement rules.
"""

from form_schema.rules import comparison, conditional, files, formats
from form_schema.rules.derive import derive_rules
from form_schema.rules.files import FileConstraints, drop_empty_uploads
from form_schema.rules.params import FieldRef, Literal, Param, parse_param, parse_params
from form_schema.rules.registry import (
    Rule,
    RuleDefinition,
    RuleRegistry,
    SubmissionContext,
)
from form_schema.rules.values import is_empty

DEFAULT_REGISTRY = RuleRegistry(
    [
        *conditional.RULES,
        *formats.RULES,
        *comparison.RULES,
        *files.RULES,
    ]
)

__all__ = [
    "DEFAULT_REGISTRY",
    "FieldRef",
    "FileConstraints",
    "Literal",
    "Param",
    "Rule",
    "RuleDefinition",
    "RuleRegistry",
    "SubmissionContext",
    "derive_rules",
    "drop_empty_uploads",
    "is_empty",
    "parse_param",
    "parse_params",
]
