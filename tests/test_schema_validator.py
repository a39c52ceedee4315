"""Tests for structural schema validation."""

import pytest

from form_schema import InvalidSchemaError, SchemaValidator, assert_valid_schema, validate_schema
from form_schema.models.validation_result import ValidationResult


class TestSchemaValidator:
    """Tests for SchemaValidator."""

    def test_fails_when_form_is_missing(self):
        """Test that a schema without a form object is rejected."""
        result = SchemaValidator().validate({})
        assert isinstance(result, ValidationResult)
        assert not result.is_valid()
        assert result.errors == {"form": "Schema must include a form object."}

    @pytest.mark.parametrize("schema", [None, [], "form", {"form": []}])
    def test_non_mapping_schema(self, schema):
        """Test that non-object schemas and forms are rejected."""
        assert "form" in validate_schema(schema).errors

    def test_valid_schema(self, schema_for):
        """Test a minimal valid schema."""
        result = validate_schema(schema_for({"key": "field_1", "type": "short-text"}))
        assert result.is_valid()

    def test_rejects_invalid_field_type(self, schema_for):
        """Test that an unknown field type is reported at its path."""
        result = validate_schema(schema_for({"key": "field_1", "type": "invalid-type"}))
        assert result.errors == {
            "form.pages[0].sections[0].fields[0].type": "Field type is invalid or missing.",
        }

    def test_missing_field_key_and_type(self, schema_for):
        """Test that a field without key and type reports both."""
        result = validate_schema(schema_for({"key": "ok", "type": "text"}, {"key": "  "}))
        assert result.errors == {
            "form.pages[0].sections[0].fields[1].key": "Field key is required.",
            "form.pages[0].sections[0].fields[1].type": "Field type is invalid or missing.",
        }

    @pytest.mark.parametrize("pages", [None, [], {}, "pages"])
    def test_requires_pages(self, pages):
        """Test that pages must be a non-empty array."""
        result = validate_schema({"form": {"pages": pages}})
        assert result.errors == {"form.pages": "Form must include at least one page."}

    def test_page_and_section_keys(self):
        """Test that pages and sections must carry keys."""
        schema = {"form": {"pages": [{"sections": [{"fields": []}]}]}}
        assert validate_schema(schema).errors == {
            "form.pages[0].key": "Page key is required.",
            "form.pages[0].sections[0].key": "Section key is required.",
        }

    def test_containers_must_be_arrays(self):
        """Test that sections and fields must be arrays."""
        schema = {
            "form": {
                "pages": [
                    {"key": "p1", "sections": "nope"},
                    {"key": "p2", "sections": [{"key": "s1", "fields": {"a": 1}}]},
                ]
            }
        }
        assert validate_schema(schema).errors == {
            "form.pages[0].sections": "Sections must be an array.",
            "form.pages[1].sections[0].fields": "Fields must be an array.",
        }

    def test_entries_must_be_objects(self):
        """Test that pages, sections and fields must be objects."""
        schema = {"form": {"pages": ["x", {"key": "p", "sections": [1, {"key": "s", "fields": [None]}]}]}}
        assert validate_schema(schema).errors == {
            "form.pages[0]": "Page must be an object.",
            "form.pages[1].sections[0]": "Section must be an object.",
            "form.pages[1].sections[1].fields[0]": "Field must be an object.",
        }

    def test_options_require_data(self, schema_for):
        """Test that options fields must declare option data."""
        result = validate_schema(
            schema_for(
                {"key": "a", "type": "options"},
                {"key": "b", "type": "options", "option_properties": {"data": []}},
                {"key": "c", "type": "options", "option_properties": {"data": [{"key": "x"}]}},
            )
        )
        message = "Options field requires option_properties.data."
        assert result.errors == {
            "form.pages[0].sections[0].fields[0].option_properties.data": message,
            "form.pages[0].sections[0].fields[1].option_properties.data": message,
        }

    @pytest.mark.parametrize(
        "field_type",
        [
            "short-text", "text", "medium-text", "long-text", "file", "image", "video",
            "document", "date", "time", "datetime", "number", "boolean", "tag", "rating",
            "url", "email", "phone", "address", "country", "divider", "spacing", "hidden",
        ],
    )
    def test_all_field_types_accepted(self, schema_for, field_type):
        """Test every allowed field type other than options."""
        assert validate_schema(schema_for({"key": "f", "type": field_type})).is_valid()

    def test_failure_details(self, schema_for):
        """Test that failures record the check and received value."""
        result = validate_schema(schema_for({"key": "f", "type": "hologram"}))
        failure = result.failures[0]
        assert failure.field_name == "form.pages[0].sections[0].fields[0].type"
        assert failure.error_type == "type"
        assert failure.received == "hologram"


class TestAssertValidSchema:
    """Tests for the raising entry point."""

    def test_valid_schema_does_not_raise(self, schema_for):
        """Test that a valid schema passes silently."""
        assert assert_valid_schema(schema_for({"key": "f", "type": "text"})) is None

    def test_invalid_schema_raises(self):
        """Test that the exception carries the error map and message."""
        with pytest.raises(InvalidSchemaError) as exc_info:
            assert_valid_schema({})

        assert exc_info.value.errors == {"form": "Schema must include a form object."}
        assert str(exc_info.value) == 'Invalid form schema: {"form": "Schema must include a form object."}'
