"""
Constants for the form-schema validation engine.

This module contains the field type sets, patterns, value sets and
default messages used by the schema and submission validators.
Centralizing these makes them easier to maintain and update.
"""

import re

# Closed set of field types a schema may declare
ALLOWED_FIELD_TYPES = (
    "short-text",
    "text",
    "medium-text",
    "long-text",
    "file",
    "image",
    "video",
    "document",
    "options",
    "date",
    "time",
    "datetime",
    "number",
    "boolean",
    "tag",
    "rating",
    "url",
    "email",
    "phone",
    "address",
    "country",
    "divider",
    "spacing",
    "hidden",
)

TEXT_TYPES = frozenset({"short-text", "text", "medium-text", "long-text", "address", "country"})
NUMERIC_TYPES = frozenset({"number", "rating"})
FILE_TYPES = frozenset({"file", "image", "video", "document"})
LAYOUT_TYPES = frozenset({"divider", "spacing"})

# Types whose values are measured by character length for min_length/max_length
LENGTH_TYPES = TEXT_TYPES | {"email", "phone", "url"}

SINGLE_OPTION_TYPES = frozenset({"select", "radio"})
MULTI_OPTION_TYPES = frozenset({"multi-select", "checkbox"})

# Field reference token: {field:<key>}
FIELD_REF_PREFIX = "{field:"
FIELD_REF_SUFFIX = "}"

PHONE_PATTERN = re.compile(r"^[0-9 +().-]{6,}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")

# Numeric strings: optional surrounding whitespace, sign, decimal, exponent
NUMERIC_STRING_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
)

# Relative date offsets accepted by before/after, e.g. "+3 days"
RELATIVE_DATE_PATTERN = re.compile(
    r"^([+-]?\d+)\s*(second|minute|hour|day|week)s?$", re.IGNORECASE
)

BOOLEAN_STRINGS = frozenset({"true", "false", "0", "1", "y", "n", "yes", "no", "on", "off"})

ACCEPTED_VALUES = (True, 1, "1", "true", "on", "yes")
DECLINED_VALUES = (False, 0, "0", "false", "off", "no")

# Upload error code that marks an empty file input
UPLOAD_ERR_NO_FILE = 4

# Attribute names on upload objects that carry the declared MIME type
MIME_TYPE_ATTRIBUTES = ("content_type", "mimetype", "mime_type")

# Regex flags accepted after a delimited pattern like /^abc$/i
REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}

LOGGER_NAME = "form-schema"
