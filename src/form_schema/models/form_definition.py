"""
Form definition models.

These models describe the declarative form schema: pages contain
sections, sections contain fields, and each field carries a type,
constraints, option properties and named validation rules.

Callers hand the engine plain JSON-compatible data. The walkers read
that data directly for structural checks and convert each field with
``FormField.from_raw`` before rule evaluation.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    """Closed set of field types a form schema may declare."""

    SHORT_TEXT = "short-text"
    TEXT = "text"
    MEDIUM_TEXT = "medium-text"
    LONG_TEXT = "long-text"
    FILE = "file"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    OPTIONS = "options"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TAG = "tag"
    RATING = "rating"
    URL = "url"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
    COUNTRY = "country"
    DIVIDER = "divider"
    SPACING = "spacing"
    HIDDEN = "hidden"


class OptionItem(BaseModel):
    """A single selectable option."""

    key: str = Field(..., description="Submitted value for this option")
    value: str = Field(default="", description="Display label")


class OptionProperties(BaseModel):
    """Option list configuration for an ``options`` field."""

    type: str = Field(default="select", description="select, radio, multi-select or checkbox")
    max_select: int | None = Field(default=None, description="Maximum number of selected options")
    data: list[OptionItem] = Field(default_factory=list, description="Declared options")

    @property
    def keys(self) -> list[str]:
        return [item.key for item in self.data]

    @classmethod
    def from_raw(cls, raw: Any) -> "OptionProperties | None":
        if not isinstance(raw, dict):
            return None

        items = []
        for entry in raw.get("data") or []:
            if isinstance(entry, dict) and entry.get("key") is not None:
                items.append(OptionItem(key=str(entry["key"]), value=str(entry.get("value") or "")))

        max_select = raw.get("max_select")
        if isinstance(max_select, bool) or not isinstance(max_select, (int, float, str)):
            max_select = None
        else:
            try:
                max_select = int(float(max_select))
            except (ValueError, OverflowError):
                max_select = None

        return cls(
            type=str(raw.get("type") or "select"),
            max_select=max_select,
            data=items,
        )


class RuleSpec(BaseModel):
    """A named validation rule as written in the schema."""

    rule: str = Field(..., description="Rule name, e.g. 'min' or 'required_if'")
    params: list[Any] = Field(default_factory=list, description="Positional parameters")
    message: str | None = Field(default=None, description="Custom failure message")

    @classmethod
    def from_raw(cls, raw: Any) -> "RuleSpec | None":
        """Build a rule spec from caller data, or None if it names no rule."""
        if not isinstance(raw, dict) or not isinstance(raw.get("rule"), str):
            return None

        params = raw.get("params")
        if params is None:
            params = []
        elif isinstance(params, dict):
            params = list(params.values())
        elif not isinstance(params, (list, tuple)):
            params = [params]

        message = raw.get("message")
        return cls(
            rule=raw["rule"],
            params=list(params),
            message=message if isinstance(message, str) and message else None,
        )


class FormField(BaseModel):
    """A submittable field with its type, constraints and rules."""

    key: str = Field(..., description="Field key, used as the payload key")
    type: str = Field(default="", description="Field type, one of FieldType")
    required: bool = Field(default=False, description="Whether a value must be present")
    constraints: dict[str, Any] = Field(default_factory=dict, description="Structural constraints")
    option_properties: OptionProperties | None = Field(default=None)
    validations: list[RuleSpec] = Field(default_factory=list, description="Explicit rules")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "FormField":
        """
        Leniently convert a raw field definition.

        Malformed parts are dropped rather than rejected: structural
        problems are reported by the schema validator, not here.
        """
        constraints = raw.get("constraints")
        validations = raw.get("validations")

        rules = []
        if isinstance(validations, (list, tuple)):
            for entry in validations:
                spec = RuleSpec.from_raw(entry)
                if spec is not None:
                    rules.append(spec)

        field_type = raw.get("type")
        return cls(
            key=str(raw["key"]),
            type=field_type if isinstance(field_type, str) else "",
            required=bool(raw.get("required", False)),
            constraints=dict(constraints) if isinstance(constraints, dict) else {},
            option_properties=OptionProperties.from_raw(raw.get("option_properties")),
            validations=rules,
        )


class Section(BaseModel):
    """A group of fields within a page."""

    key: str
    fields: list[FormField] = Field(default_factory=list)


class Page(BaseModel):
    """A page of the form."""

    key: str
    sections: list[Section] = Field(default_factory=list)


class FormDefinition(BaseModel):
    """The ``form`` object of a schema."""

    pages: list[Page] = Field(default_factory=list)

    def iter_fields(self):
        """Yield fields in document order (page, then section, then field)."""
        for page in self.pages:
            for section in page.sections:
                yield from section.fields


class FormSchema(BaseModel):
    """
    Complete form schema: ``{"form": {"pages": [...]}}``.

    Use this to build schemas in code; ``to_dict()`` produces the plain
    structure the validators accept.
    """

    form: FormDefinition

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
