"""Shared fixtures for form-schema tests."""

import pytest


def _schema_for_fields(*fields: dict) -> dict:
    return {
        "form": {
            "pages": [
                {
                    "key": "page_1",
                    "sections": [
                        {
                            "key": "section_1",
                            "fields": list(fields),
                        },
                    ],
                },
            ],
        },
    }


@pytest.fixture
def schema_for():
    """Build a one-page, one-section schema around the given fields."""
    return _schema_for_fields
