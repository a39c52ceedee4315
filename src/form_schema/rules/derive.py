"""
Implicit rules derived from a field's type and constraints.

Every field type implies a baseline rule (``string`` for text types,
``numeric`` for numbers, and so on). Constraints then add bounds,
allow/deny lists, option membership and upload limits. Constraint keys
that are absent, blank or non-numeric where a number is expected are
ignored.
"""

from typing import Any

from form_schema.constants import (
    FILE_TYPES,
    LENGTH_TYPES,
    MULTI_OPTION_TYPES,
    NUMERIC_TYPES,
    TEXT_TYPES,
)
from form_schema.models.form_definition import FieldType, FormField
from form_schema.rules.files import FileConstraints
from form_schema.rules.registry import Rule
from form_schema.rules.values import normalize_list, to_number

# Baseline rules per field type, in evaluation order
TYPE_RULES: dict[str, tuple[str, ...]] = {
    **{field_type: ("string",) for field_type in TEXT_TYPES},
    FieldType.EMAIL.value: ("email", "string"),
    FieldType.PHONE.value: ("phone", "string"),
    FieldType.URL.value: ("url", "string"),
    FieldType.NUMBER.value: ("numeric",),
    FieldType.RATING.value: ("numeric",),
    FieldType.BOOLEAN.value: ("boolean",),
    FieldType.DATE.value: ("date",),
    FieldType.TIME.value: ("time",),
    FieldType.DATETIME.value: ("datetime",),
    FieldType.TAG.value: ("array",),
}


def _number(constraints: dict[str, Any], key: str) -> float | None:
    return to_number(constraints.get(key))


def _bounds(constraints: dict[str, Any], low_key: str, high_key: str, low_rule: str, high_rule: str) -> list[Rule]:
    rules = []
    low = _number(constraints, low_key)
    if low is not None:
        rules.append(Rule.of(low_rule, low))
    high = _number(constraints, high_key)
    if high is not None:
        rules.append(Rule.of(high_rule, high))
    return rules


def _option_rules(field: FormField) -> list[Rule]:
    options = field.option_properties
    if options is None:
        return []

    keys = options.keys
    if options.type not in MULTI_OPTION_TYPES:
        return [Rule.of("in", *keys)] if keys else []

    rules = [Rule.of("array")]
    if options.max_select is not None:
        rules.append(Rule.of("max", options.max_select))
    rules.extend(_bounds(field.constraints, "min", "max", "min", "max"))
    if keys:
        rules.append(Rule.of("each_in", *keys))
    return rules


def _email_rules(constraints: dict[str, Any]) -> list[Rule]:
    allowed = normalize_list(constraints.get("allowed_domains"), lower=True)
    disallowed = normalize_list(constraints.get("disallowed_domains"), lower=True)
    if not allowed and not disallowed:
        return []
    return [Rule.of("email_domains", allowed, disallowed)]


def _country_rules(constraints: dict[str, Any]) -> list[Rule]:
    rules = []
    allowed = normalize_list(constraints.get("allow_countries"))
    if allowed:
        rules.append(Rule.of("in", *allowed))
    excluded = normalize_list(constraints.get("exclude_countries"))
    if excluded:
        rules.append(Rule.of("not_in", *excluded))
    return rules


def _step_rules(constraints: dict[str, Any], tolerance: float) -> list[Rule]:
    size = _number(constraints, "step")
    if size is None:
        return []
    base = _number(constraints, "min")
    return [Rule.of("step", size, 0.0 if base is None else base, tolerance)]


def derive_rules(field: FormField, step_tolerance: float = 1e-9) -> list[Rule]:
    """
    Build the implicit rules for a field.

    File fields get a single ``file_constraints`` rule and none of the
    generic type rules. Layout and hidden fields get no rules.
    """
    field_type = field.type
    constraints = field.constraints

    if field_type in FILE_TYPES:
        return [Rule.of("file_constraints", FileConstraints.from_constraints(constraints))]

    if field_type == FieldType.OPTIONS.value:
        return _option_rules(field)

    rules = [Rule.of(name) for name in TYPE_RULES.get(field_type, ())]

    if field_type in LENGTH_TYPES:
        rules.extend(_bounds(constraints, "min_length", "max_length", "min_length", "max_length"))

    if field_type in NUMERIC_TYPES or field_type == FieldType.TAG.value:
        rules.extend(_bounds(constraints, "min", "max", "min", "max"))

    if field_type == FieldType.NUMBER.value:
        rules.extend(_step_rules(constraints, step_tolerance))

    if field_type == FieldType.EMAIL.value:
        rules.extend(_email_rules(constraints))

    if field_type == FieldType.COUNTRY.value:
        rules.extend(_country_rules(constraints))

    return rules
