"""
Configuration module for the form-schema validation engine.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class FormSchemaConfig:
    """Configuration settings for form-schema."""

    # Logging settings
    log_level: str = "WARNING"

    # Tracing settings
    enable_tracing: bool = False
    trace_verbose: bool = False
    trace_file: str | None = None

    # Rule settings
    step_tolerance: float = 1e-9  # Floating-point tolerance for step checks

    # Messages
    required_message: str = "This field is required."
    fallback_message: str = "Validation failed."

    @classmethod
    def from_env(cls) -> "FormSchemaConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            log_level=os.getenv("FORM_SCHEMA_LOG_LEVEL", _defaults.log_level).upper(),
            enable_tracing=_env_bool("FORM_SCHEMA_ENABLE_TRACING", _defaults.enable_tracing),
            trace_verbose=_env_bool("FORM_SCHEMA_TRACE_VERBOSE", _defaults.trace_verbose),
            trace_file=os.getenv("FORM_SCHEMA_TRACE_FILE") or _defaults.trace_file,
            step_tolerance=float(os.getenv("FORM_SCHEMA_STEP_TOLERANCE", str(_defaults.step_tolerance))),
            required_message=os.getenv("FORM_SCHEMA_REQUIRED_MESSAGE", _defaults.required_message),
            fallback_message=os.getenv("FORM_SCHEMA_FALLBACK_MESSAGE", _defaults.fallback_message),
        )


config = FormSchemaConfig.from_env()


def get_config() -> FormSchemaConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormSchemaConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
