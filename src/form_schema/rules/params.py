"""
Rule parameter normalization and field references.

A rule's parameters are a positional list. A parameter written as
``{field:<key>}`` refers to another field and is resolved against the
submission context only when the rule is evaluated; every other value
is a literal.
"""

from dataclasses import dataclass
from typing import Any, Union

from form_schema.constants import FIELD_REF_PREFIX, FIELD_REF_SUFFIX


@dataclass(frozen=True)
class Literal:
    """A parameter whose value is used as written."""

    value: Any


@dataclass(frozen=True)
class FieldRef:
    """A parameter that reads the live value of another field."""

    key: str


Param = Union[Literal, FieldRef]


def field_ref_key(value: Any) -> str | None:
    """Return ``key`` for a string of the exact form ``{field:key}``, else None."""
    if not isinstance(value, str):
        return None
    if not value.startswith(FIELD_REF_PREFIX) or not value.endswith(FIELD_REF_SUFFIX):
        return None

    key = value[len(FIELD_REF_PREFIX):-len(FIELD_REF_SUFFIX)]
    return key or None


def parse_param(value: Any) -> Param:
    if isinstance(value, (Literal, FieldRef)):
        return value
    key = field_ref_key(value)
    return FieldRef(key) if key is not None else Literal(value)


def normalize_params(raw: Any, unwrap: bool = True) -> list[Any]:
    """
    Flatten raw parameters into a positional list.

    A single wrapped list (``[["a", "b"]]``) is unwrapped unless
    ``unwrap`` is false, keyed parameters keep their values in order,
    and a bare scalar becomes a one-element list.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        params = list(raw.values())
    elif isinstance(raw, (list, tuple)):
        params = list(raw)
    else:
        params = [raw]

    if unwrap and len(params) == 1 and isinstance(params[0], (list, tuple)):
        params = list(params[0])
    return params


def parse_params(raw: Any, unwrap: bool = True) -> tuple[Param, ...]:
    return tuple(parse_param(value) for value in normalize_params(raw, unwrap))


def field_key(param: Param | None) -> str | None:
    """
    The field key a parameter names, for rules whose parameters are keys.

    Both ``{field:other}`` and a bare ``other`` name the field ``other``.
    """
    if isinstance(param, FieldRef):
        return param.key
    if isinstance(param, Literal) and isinstance(param.value, str) and param.value != "":
        return param.value
    return None


def field_keys(params) -> list[str]:
    """Distinct field keys named by ``params``, in order of first appearance."""
    keys: list[str] = []
    for param in params:
        key = field_key(param)
        if key is not None and key not in keys:
            keys.append(key)
    return keys
