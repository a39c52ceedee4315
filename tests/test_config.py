"""Tests for configuration."""

import pytest

from form_schema import SubmissionValidator
from form_schema.config import FormSchemaConfig, get_config, update_config


@pytest.fixture
def restore_config():
    config = get_config()
    saved = dict(vars(config))
    yield config
    update_config(**saved)


class TestFormSchemaConfig:
    """Tests for FormSchemaConfig."""

    def test_defaults(self):
        """Test default settings."""
        config = FormSchemaConfig()
        assert config.log_level == "WARNING"
        assert config.enable_tracing is False
        assert config.trace_verbose is False
        assert config.trace_file is None
        assert config.step_tolerance == 1e-9
        assert config.required_message == "This field is required."
        assert config.fallback_message == "Validation failed."

    def test_from_env(self, monkeypatch):
        """Test reading settings from environment variables."""
        monkeypatch.setenv("FORM_SCHEMA_LOG_LEVEL", "debug")
        monkeypatch.setenv("FORM_SCHEMA_ENABLE_TRACING", "TRUE")
        monkeypatch.setenv("FORM_SCHEMA_TRACE_VERBOSE", "yes")
        monkeypatch.setenv("FORM_SCHEMA_TRACE_FILE", "traces.jsonl")
        monkeypatch.setenv("FORM_SCHEMA_STEP_TOLERANCE", "0.001")
        monkeypatch.setenv("FORM_SCHEMA_REQUIRED_MESSAGE", "Needed.")

        config = FormSchemaConfig.from_env()
        assert config.log_level == "DEBUG"
        assert config.enable_tracing is True
        assert config.trace_verbose is False
        assert config.trace_file == "traces.jsonl"
        assert config.step_tolerance == 0.001
        assert config.required_message == "Needed."
        assert config.fallback_message == "Validation failed."

    def test_from_env_defaults(self, monkeypatch):
        """Test that unset variables fall back to defaults."""
        for name in (
            "FORM_SCHEMA_LOG_LEVEL",
            "FORM_SCHEMA_ENABLE_TRACING",
            "FORM_SCHEMA_TRACE_FILE",
            "FORM_SCHEMA_STEP_TOLERANCE",
        ):
            monkeypatch.delenv(name, raising=False)

        config = FormSchemaConfig.from_env()
        assert config.log_level == "WARNING"
        assert config.enable_tracing is False
        assert config.trace_file is None
        assert config.step_tolerance == 1e-9


class TestUpdateConfig:
    """Tests for the global configuration."""

    def test_update_config(self, restore_config):
        """Test updating known settings and ignoring unknown ones."""
        config = update_config(fallback_message="Nope.", not_a_setting=1)
        assert config is get_config()
        assert config.fallback_message == "Nope."
        assert not hasattr(config, "not_a_setting")

    def test_validator_snapshots_config(self, restore_config, schema_for):
        """Test that a validator keeps the settings it was created with."""
        schema = schema_for({"key": "name", "type": "text", "required": True})
        validator = SubmissionValidator()
        update_config(required_message="Changed.")

        assert validator.validate(schema, {}).errors == {"name": "This field is required."}
        assert SubmissionValidator().validate(schema, {}).errors == {"name": "Changed."}
