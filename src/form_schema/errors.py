"""Exception definitions for the form-schema package."""

import json
from typing import Any


class FormSchemaError(Exception):
    """Base exception for all form-schema errors.

    Use this as a catch-all when you don't need to distinguish between
    an invalid schema and an invalid submission.
    """

    pass


class _ErrorMapException(FormSchemaError, ValueError):
    """Exception carrying the full path-to-message error map of a validation pass."""

    prefix = "Invalid input"

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"{self.prefix}: {json.dumps(self.errors)}")


class InvalidSchemaError(_ErrorMapException):
    """Raised by assert-style entry points when a form schema is structurally invalid."""

    prefix = "Invalid form schema"


class InvalidSubmissionError(_ErrorMapException):
    """Raised by assert-style entry points when submitted data fails validation."""

    prefix = "Invalid submission"


class RuleParameterError(FormSchemaError, ValueError):
    """Raised by a rule predicate when its parameters are malformed.

    The dispatcher catches this and treats the rule as not applicable,
    so it never escapes a validation pass.
    """

    def __init__(self, rule: str, reason: str, params: Any = None):
        self.rule = rule
        self.reason = reason
        self.params = params
        super().__init__(f"Rule '{rule}' has malformed parameters: {reason}")
