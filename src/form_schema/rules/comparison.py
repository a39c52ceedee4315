"""
Comparison, membership and string-affix rules.

Size rules (min, max, between, not_between) compare numeric values by
value, lists by element count and anything else by character length.
The numeric comparison rules (gt, gte, lt, lte) and step require a
numeric value and fail otherwise.
"""

import math
import operator
from typing import Any

from form_schema.errors import RuleParameterError
from form_schema.rules.params import Param
from form_schema.rules.registry import RuleDefinition, SubmissionContext
from form_schema.rules.values import (
    as_text,
    is_numeric,
    measure,
    strict_in,
    to_number,
    to_timestamp,
)


def _bound(name: str, params: tuple[Param, ...], context: SubmissionContext, index: int = 0) -> float:
    args = context.resolve_all(params)
    bound = to_number(args[index]) if len(args) > index else None
    if bound is None:
        raise RuleParameterError(name, f"parameter {index + 1} must be numeric", params)
    return bound


def _unit(value: Any) -> str:
    if is_numeric(value):
        return ""
    if isinstance(value, (list, tuple, dict)):
        return " items"
    return " characters"


def _size_message(value: Any, relation: str, bound: float) -> str:
    if is_numeric(value):
        return f"This field must be {relation} {as_text(bound)}."
    if isinstance(value, (list, tuple, dict)):
        return f"This field must have {relation} {as_text(bound)} items."
    return f"This field must be {relation} {as_text(bound)} characters."


def min_rule(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    bound = _bound("min", params, context)
    if measure(value) >= bound:
        return None
    return _size_message(value, "at least", bound)


def max_rule(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    bound = _bound("max", params, context)
    if measure(value) <= bound:
        return None
    return _size_message(value, "at most", bound)


def min_length(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    bound = _bound("min_length", params, context)
    if len(as_text(value)) >= bound:
        return None
    return f"This field must be at least {as_text(bound)} characters."


def max_length(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    bound = _bound("max_length", params, context)
    if len(as_text(value)) <= bound:
        return None
    return f"This field must be at most {as_text(bound)} characters."


def _in_range(name: str, value: Any, params: tuple[Param, ...], context: SubmissionContext):
    low = _bound(name, params, context, 0)
    high = _bound(name, params, context, 1)
    return low, high, low <= measure(value) <= high


def between(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    low, high, inside = _in_range("between", value, params, context)
    if inside:
        return None
    return f"This field must be between {as_text(low)} and {as_text(high)}{_unit(value)}."


def not_between(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    low, high, inside = _in_range("not_between", value, params, context)
    if not inside:
        return None
    return f"This field must not be between {as_text(low)} and {as_text(high)}{_unit(value)}."


def in_rule(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if strict_in(value, context.resolve_all(params)):
        return None
    return "The selected value is invalid."


def not_in(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if not strict_in(value, context.resolve_all(params)):
        return None
    return "The selected value is not allowed."


def each_in(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Every element of a list value must be one of the parameters."""
    allowed = context.resolve_all(params)
    items = value if isinstance(value, (list, tuple)) else [value]
    for item in items:
        if not strict_in(item, allowed):
            return f"The selected value '{as_text(item)}' is invalid."
    return None


def _affixes(params: tuple[Param, ...], context: SubmissionContext) -> list[str]:
    return [text for text in (as_text(p) for p in context.resolve_all(params)) if text != ""]


def starts_with(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    prefixes = _affixes(params, context)
    if not prefixes or any(as_text(value).startswith(p) for p in prefixes):
        return None
    return f"This field must start with one of: {', '.join(prefixes)}."


def ends_with(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    suffixes = _affixes(params, context)
    if not suffixes or any(as_text(value).endswith(s) for s in suffixes):
        return None
    return f"This field must end with one of: {', '.join(suffixes)}."


_COMPARISONS = {
    "gt": (operator.gt, "greater than"),
    "gte": (operator.ge, "greater than or equal to"),
    "lt": (operator.lt, "less than"),
    "lte": (operator.le, "less than or equal to"),
}


def _numeric_comparison(name: str):
    compare, wording = _COMPARISONS[name]

    def predicate(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
        if not params:
            raise RuleParameterError(name, "expected a comparison target", params)
        target = context.resolve(params[0])
        number = to_number(value)
        number_target = to_number(target)
        if number is None or number_target is None:
            return f"This field must be a number {wording} {as_text(target) or 'the target'}."
        if compare(number, number_target):
            return None
        return f"This field must be {wording} {as_text(target)}."

    predicate.__name__ = name
    return predicate


def step(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """
    The value must equal ``base + k * size`` for an integer ``k``.

    Parameters: size, base (default 0), tolerance (default 1e-9).
    """
    args = context.resolve_all(params)
    size = to_number(args[0]) if args else None
    base = (to_number(args[1]) if len(args) > 1 else None) or 0.0
    tolerance = (to_number(args[2]) if len(args) > 2 else None) or 1e-9

    if size is None or size <= 0:
        return "This field has an invalid step size."

    number = to_number(value)
    if number is None:
        return "This field must be a number."

    quotient = (number - base) / size
    if math.isfinite(quotient) and abs(quotient - round(quotient)) < tolerance:
        return None
    return f"This field must be in increments of {as_text(size)}."


def _date_comparison(name: str):
    wording = "before" if name == "before" else "after"

    def predicate(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
        if not params:
            raise RuleParameterError(name, "expected a date or field reference", params)
        target = context.resolve(params[0])
        value_ts = to_timestamp(value, context.now)
        target_ts = to_timestamp(target, context.now)
        message = f"This field must be a date {wording} {as_text(target) or 'the reference date'}."
        if value_ts is None or target_ts is None:
            return message
        passed = value_ts < target_ts if name == "before" else value_ts > target_ts
        return None if passed else message

    predicate.__name__ = name
    return predicate


RULES = (
    RuleDefinition("min", min_rule),
    RuleDefinition("max", max_rule),
    RuleDefinition("min_length", min_length),
    RuleDefinition("max_length", max_length),
    RuleDefinition("between", between),
    RuleDefinition("not_between", not_between),
    RuleDefinition("in", in_rule),
    RuleDefinition("not_in", not_in),
    RuleDefinition("each_in", each_in),
    RuleDefinition("starts_with", starts_with),
    RuleDefinition("ends_with", ends_with),
    RuleDefinition("gt", _numeric_comparison("gt")),
    RuleDefinition("gte", _numeric_comparison("gte")),
    RuleDefinition("lt", _numeric_comparison("lt")),
    RuleDefinition("lte", _numeric_comparison("lte")),
    RuleDefinition("step", step),
    RuleDefinition("before", _date_comparison("before")),
    RuleDefinition("after", _date_comparison("after")),
)
