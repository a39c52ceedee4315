"""
File upload constraints.

Only upload metadata is inspected: declared size, declared MIME type and
upload error code. A file-like value is either a mapping with ``size``
and ``type`` keys (``{name, type, tmp_name, size, error}``) or an upload
object exposing ``size`` and a MIME attribute (``content_type``,
``mimetype`` or ``mime_type``).
"""

from dataclasses import dataclass
from typing import Any

from form_schema.constants import MIME_TYPE_ATTRIBUTES, UPLOAD_ERR_NO_FILE
from form_schema.errors import RuleParameterError
from form_schema.rules.params import Literal, Param
from form_schema.rules.registry import RuleDefinition, SubmissionContext
from form_schema.rules.values import as_text, is_empty, normalize_list, to_number


@dataclass(frozen=True)
class FileConstraints:
    """Upload limits declared in a file field's constraints."""

    accept: tuple[str, ...] = ()
    allow_multiple: bool = False
    min_files: int | None = None
    max_files: int | None = None
    max_file_size: int | None = None
    max_total_size: int | None = None

    @classmethod
    def from_constraints(cls, constraints: dict[str, Any]) -> "FileConstraints":
        def _int(key: str) -> int | None:
            number = to_number(constraints.get(key))
            return None if number is None else int(number)

        return cls(
            accept=tuple(normalize_list(constraints.get("accept"), lower=True)),
            allow_multiple=bool(constraints.get("allow_multiple", False)),
            min_files=_int("min"),
            max_files=_int("max"),
            max_file_size=_int("max_file_size"),
            max_total_size=_int("max_total_size"),
        )


@dataclass(frozen=True)
class UploadedFile:
    """Metadata of one uploaded file."""

    size: int | None
    mime_type: str | None
    error: int = 0


def _object_mime_type(value: Any) -> str | None:
    for attribute in MIME_TYPE_ATTRIBUTES:
        mime = getattr(value, attribute, None)
        if isinstance(mime, str) and mime.strip():
            return mime
    return None


def is_file_like(value: Any) -> bool:
    if isinstance(value, dict):
        return "size" in value and "type" in value
    if value is None or isinstance(value, (str, bytes, int, float, list, tuple)):
        return False
    return hasattr(value, "size") and any(hasattr(value, a) for a in MIME_TYPE_ATTRIBUTES)


def coerce_upload(value: Any) -> UploadedFile | None:
    """Read the metadata of a file-like value, or None if it is not file-like."""
    if not is_file_like(value):
        return None

    if isinstance(value, dict):
        size = to_number(value.get("size"))
        mime = value.get("type")
        error = to_number(value.get("error"))
        return UploadedFile(
            size=None if size is None else int(size),
            mime_type=mime if isinstance(mime, str) and mime.strip() else None,
            error=0 if error is None else int(error),
        )

    size = to_number(getattr(value, "size", None))
    error = to_number(getattr(value, "error", None))
    return UploadedFile(
        size=None if size is None else int(size),
        mime_type=_object_mime_type(value),
        error=0 if error is None else int(error),
    )


def _is_placeholder(value: Any) -> bool:
    upload = coerce_upload(value)
    return upload is not None and upload.error == UPLOAD_ERR_NO_FILE


def drop_empty_uploads(value: Any) -> Any:
    """
    Remove "no file" placeholders from a submitted upload value.

    An empty file input submits a descriptor with error code 4. Such
    entries and blank entries are dropped from lists; a lone placeholder
    becomes None. An empty result therefore reads as an empty field.
    """
    if _is_placeholder(value):
        return None
    if isinstance(value, (list, tuple)):
        return [item for item in value if not is_empty(item) and not _is_placeholder(item)]
    return value


def file_constraints(value: Any, params: tuple[Param, ...], context: SubmissionContext) -> str | None:
    constraints = params[0].value if params and isinstance(params[0], Literal) else None
    if not isinstance(constraints, FileConstraints):
        raise RuleParameterError("file_constraints", "expected FileConstraints", params)

    value = drop_empty_uploads(value)
    if is_empty(value):
        return None

    entries = list(value) if isinstance(value, (list, tuple)) else [value]
    uploads = [coerce_upload(item) for item in entries]
    if any(upload is None for upload in uploads):
        return "This field is not a valid file upload."

    if not constraints.allow_multiple and len(uploads) > 1:
        return "This field does not allow multiple files."

    count = len(uploads)
    if constraints.min_files is not None and count < constraints.min_files:
        return f"This field must include at least {constraints.min_files} file(s)."
    if constraints.max_files is not None and count > constraints.max_files:
        return f"This field must include at most {constraints.max_files} file(s)."

    total_size = 0
    for upload in uploads:
        if upload.error != 0:
            return "This field contains a failed upload."
        if upload.size is None:
            return "This field contains a file with unknown size."
        if constraints.max_file_size is not None and upload.size > constraints.max_file_size:
            return f"This field contains a file that exceeds {constraints.max_file_size} bytes."

        total_size += upload.size

        if constraints.accept:
            if upload.mime_type is None:
                return "This field contains a file with unknown type."
            if upload.mime_type.lower() not in constraints.accept:
                return f"This field only accepts {', '.join(constraints.accept)} files."

    if constraints.max_total_size is not None and total_size > constraints.max_total_size:
        return f"This field total size must not exceed {as_text(constraints.max_total_size)} bytes."

    return None


RULES = (
    RuleDefinition("file_constraints", file_constraints),
)
