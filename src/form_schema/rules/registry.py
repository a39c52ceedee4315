"""
Rule values, the submission context and the rule dispatch registry.

A ``Rule`` is a rule name plus its parameters and optional custom
message. The registry maps rule names to pure predicate functions and
is immutable once built, so a single registry can be shared by any
number of concurrent validation passes.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable

from form_schema.constants import LOGGER_NAME
from form_schema.errors import RuleParameterError
from form_schema.models.form_definition import RuleSpec
from form_schema.rules.params import FieldRef, Literal, Param, parse_params
from form_schema.rules.values import is_empty

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class Rule:
    """A named rule with its parsed parameters."""

    name: str
    params: tuple[Param, ...] = ()
    message: str | None = None

    @classmethod
    def from_spec(cls, spec: RuleSpec, unwrap: bool = True) -> "Rule":
        return cls(name=spec.rule, params=parse_params(spec.params, unwrap), message=spec.message)

    @classmethod
    def of(cls, name: str, *values: Any, message: str | None = None) -> "Rule":
        """Build a rule whose parameters are all literals."""
        return cls(name=name, params=tuple(Literal(v) for v in values), message=message)


class SubmissionContext(Mapping):
    """
    Read-only snapshot of the submitted data for one validation pass.

    ``replacements`` are overlaid on ``payload``; on a key collision the
    replacement wins. Neither input is modified.
    """

    def __init__(
        self,
        payload: Mapping[str, Any] | None = None,
        replacements: Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ):
        merged = dict(payload or {})
        merged.update(replacements or {})
        self._data = MappingProxyType(merged)
        self.now = now or datetime.now(timezone.utc)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def resolve(self, param: Param) -> Any:
        """The value of a parameter: a literal as written, a field reference as submitted."""
        if isinstance(param, FieldRef):
            return self._data.get(param.key)
        return param.value

    def resolve_all(self, params: Iterable[Param]) -> list[Any]:
        return [self.resolve(p) for p in params]


Predicate = Callable[[Any, tuple[Param, ...], SubmissionContext], "str | None"]


@dataclass(frozen=True)
class RuleDefinition:
    """
    A rule name bound to its predicate.

    The predicate returns None when the value passes and a failure
    message otherwise. When ``vacuous`` is set, empty values pass
    without consulting the predicate. When ``unwrap_params`` is set, a
    lone list parameter is spread into positional parameters.
    """

    name: str
    predicate: Predicate = field(repr=False)
    vacuous: bool = True
    unwrap_params: bool = True


class RuleRegistry(Mapping):
    """Immutable mapping of rule names to definitions."""

    def __init__(self, definitions: Iterable[RuleDefinition] = ()):
        self._definitions = MappingProxyType({d.name: d for d in definitions})

    def __getitem__(self, name: str) -> RuleDefinition:
        return self._definitions[name]

    def __iter__(self):
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def with_rules(self, *definitions: RuleDefinition) -> "RuleRegistry":
        """Return a new registry with ``definitions`` added or replacing existing names."""
        return RuleRegistry([*self._definitions.values(), *definitions])

    def rule_from_spec(self, spec: RuleSpec) -> Rule:
        """Parse a declared rule with the parameter handling of its definition."""
        definition = self._definitions.get(spec.rule)
        unwrap = definition.unwrap_params if definition is not None else True
        return Rule.from_spec(spec, unwrap)

    def evaluate(
        self,
        rule: Rule,
        value: Any,
        context: SubmissionContext,
        fallback_message: str = "Validation failed.",
    ) -> str | None:
        """
        Evaluate one rule against a value.

        Returns None if the rule passes, is not applicable (malformed
        parameters) or is unknown; otherwise the failure message, which
        is the rule's custom message when one was given.
        """
        definition = self._definitions.get(rule.name)
        if definition is None:
            logger.warning(f"Unknown validation rule '{rule.name}', treating as passed")
            return None

        if definition.vacuous and is_empty(value):
            return None

        try:
            message = definition.predicate(value, rule.params, context)
        except RuleParameterError as e:
            logger.debug(f"Skipping rule: {e}")
            return None

        if message is None:
            return None
        return rule.message or message or fallback_message
