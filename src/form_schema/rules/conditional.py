"""
Requiredness rules.

``required`` fails on an empty value. The conditional variants decide
from other fields' current values whether the field is required, then
apply the same emptiness check. None of these rules pass vacuously.
"""

from typing import Any

from form_schema.errors import RuleParameterError
from form_schema.rules.params import Param, field_key, field_keys
from form_schema.rules.registry import RuleDefinition, SubmissionContext
from form_schema.rules.values import is_accepted, is_declined, is_empty, loose_equals

REQUIRED_MESSAGE = "This field is required."


def required(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    return REQUIRED_MESSAGE if is_empty(value) else None


def _required_when(condition: bool, value: Any) -> str | None:
    if condition and is_empty(value):
        return REQUIRED_MESSAGE
    return None


def _other_and_targets(name: str, params: tuple[Param, ...], context: SubmissionContext):
    other = field_key(params[0]) if params else None
    targets = context.resolve_all(params[1:])
    if other is None or not targets:
        raise RuleParameterError(name, "expected a field key followed by at least one value", params)
    return context.get(other), targets


def required_if(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Required when the other field loosely equals any of the targets."""
    if not is_empty(value):
        return None
    actual, targets = _other_and_targets("required_if", params, context)
    return _required_when(any(loose_equals(actual, t) for t in targets), value)


def required_unless(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Required unless the other field loosely equals one of the targets."""
    if not is_empty(value):
        return None
    actual, targets = _other_and_targets("required_unless", params, context)
    return _required_when(not any(loose_equals(actual, t) for t in targets), value)


def _single_key(name: str, params: tuple[Param, ...]) -> str:
    key = field_key(params[0]) if params else None
    if key is None:
        raise RuleParameterError(name, "expected a field key", params)
    return key


def required_if_accepted(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    key = _single_key("required_if_accepted", params)
    return _required_when(is_accepted(context.get(key)), value)


def required_if_declined(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    key = _single_key("required_if_declined", params)
    return _required_when(is_declined(context.get(key)), value)


def _present(name: str, params: tuple[Param, ...], context: SubmissionContext) -> list[bool]:
    keys = field_keys(params)
    if not keys:
        raise RuleParameterError(name, "expected at least one field key", params)
    return [not is_empty(context.get(key)) for key in keys]


def required_with(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Required when any of the other fields has a value."""
    return _required_when(any(_present("required_with", params, context)), value)


def required_with_all(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Required when all of the other fields have values."""
    return _required_when(all(_present("required_with_all", params, context)), value)


def required_without(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Required when any of the other fields is empty."""
    return _required_when(not all(_present("required_without", params, context)), value)


def required_without_all(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Required when all of the other fields are empty."""
    return _required_when(not any(_present("required_without_all", params, context)), value)


RULES = (
    RuleDefinition("required", required, vacuous=False),
    RuleDefinition("required_if", required_if, vacuous=False),
    RuleDefinition("required_unless", required_unless, vacuous=False),
    RuleDefinition("required_if_accepted", required_if_accepted, vacuous=False),
    RuleDefinition("required_if_declined", required_if_declined, vacuous=False),
    RuleDefinition("required_with", required_with, vacuous=False),
    RuleDefinition("required_with_all", required_with_all, vacuous=False),
    RuleDefinition("required_without", required_without, vacuous=False),
    RuleDefinition("required_without_all", required_without_all, vacuous=False),
)
