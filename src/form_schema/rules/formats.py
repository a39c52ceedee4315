"""
Type and format rules.

Email addresses are checked with ``email-validator`` (syntax only, no
DNS lookups) and URLs with pydantic's ``AnyUrl``. Date, time and
datetime rules are strict: the parsed value must format back to exactly
the submitted string.
"""

import functools
import re
from datetime import datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter, ValidationError

from form_schema.constants import (
    BOOLEAN_STRINGS,
    DATE_FORMAT,
    DATETIME_FORMATS,
    PHONE_PATTERN,
    REGEX_FLAGS,
    TIME_PATTERN,
)
from form_schema.errors import RuleParameterError
from form_schema.rules.params import Param
from form_schema.rules.registry import RuleDefinition, SubmissionContext
from form_schema.rules.values import as_text, is_numeric, normalize_list

_URL_ADAPTER = TypeAdapter(AnyUrl)

# Delimiters recognised around a pattern written as /body/flags
_REGEX_DELIMITERS = frozenset("/#~!@%`;")


def email(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if isinstance(value, str):
        try:
            validate_email(value.strip(), check_deliverability=False)
            return None
        except EmailNotValidError:
            pass
    return "This field must be a valid email address."


def phone(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if PHONE_PATTERN.fullmatch(as_text(value)):
        return None
    return "This field must be a valid phone number."


def url(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if isinstance(value, str):
        try:
            _URL_ADAPTER.validate_python(value.strip())
            return None
        except ValidationError:
            pass
    return "This field must be a valid URL."


def boolean(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Accepts bools, 0/1, and the strings true/false, 0/1, y/n, yes/no, on/off in any case."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and value in (0, 1):
        return None
    if isinstance(value, str) and value.strip().lower() in BOOLEAN_STRINGS:
        return None
    return "This field must be true or false."


def numeric(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    return None if is_numeric(value) else "This field must be a number."


def string(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    return None if isinstance(value, str) else "This field must be text."


def array(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    return None if isinstance(value, (list, tuple)) else "This field must be a list."


def _matches_format(value: str, fmt: str) -> bool:
    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError:
        return False
    return parsed.strftime(fmt) == value


def date(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if isinstance(value, str) and _matches_format(value.strip(), DATE_FORMAT):
        return None
    return "This field must be a valid date (YYYY-MM-DD)."


def time(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if isinstance(value, str) and TIME_PATTERN.fullmatch(value):
        return None
    return "This field must be a valid time (HH:MM or HH:MM:SS)."


def datetime_rule(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    if isinstance(value, str):
        text = value.strip()
        if any(_matches_format(text, fmt) for fmt in DATETIME_FORMATS):
            return None
    return "This field must be a valid date and time."


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a rule pattern.

    A pattern wrapped in delimiters with trailing flags, like
    ``/^[a-z]+$/i``, is unwrapped and its flags applied. Any other
    pattern is compiled as written.
    """
    if len(pattern) >= 2 and pattern[0] in _REGEX_DELIMITERS:
        end = pattern.rfind(pattern[0])
        modifiers = pattern[end + 1:]
        if end > 0 and all(m in REGEX_FLAGS for m in modifiers):
            flags = 0
            for m in modifiers:
                flags |= REGEX_FLAGS[m]
            return re.compile(pattern[1:end], flags)
    return re.compile(pattern)


def regex(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    pattern = context.resolve(params[0]) if params else None
    if not isinstance(pattern, str) or pattern == "":
        raise RuleParameterError("regex", "expected a pattern string", params)
    try:
        compiled = compile_pattern(pattern)
    except re.error as e:
        raise RuleParameterError("regex", f"invalid pattern: {e}", params)

    if compiled.search(as_text(value)):
        return None
    return "This field format is invalid."


def email_domain(address: str) -> str | None:
    """The lower-cased text after the last ``@``, or None if there is none."""
    at = address.rfind("@")
    if at < 0:
        return None
    domain = address[at + 1:].strip().lower()
    return domain or None


def email_domains(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    """Parameters: allowed domains, disallowed domains (lists or comma strings)."""
    args = context.resolve_all(params)
    allowed = normalize_list(args[0], lower=True) if args else []
    disallowed = normalize_list(args[1], lower=True) if len(args) > 1 else []

    domain = email_domain(value) if isinstance(value, str) else None
    if domain is None:
        return "This field must be an email address with a domain."

    if allowed and domain not in allowed:
        return "This field must be an email address from an allowed domain."
    if disallowed and domain in disallowed:
        return "This field must not be an email address from a disallowed domain."
    return None


RULES = (
    RuleDefinition("email", email),
    RuleDefinition("phone", phone),
    RuleDefinition("url", url),
    RuleDefinition("boolean", boolean),
    RuleDefinition("numeric", numeric),
    RuleDefinition("string", string),
    RuleDefinition("array", array),
    RuleDefinition("date", date),
    RuleDefinition("time", time),
    RuleDefinition("datetime", datetime_rule),
    RuleDefinition("regex", regex),
    RuleDefinition("email_domains", email_domains, unwrap_params=False),
)
