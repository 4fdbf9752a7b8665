"""Shared fixtures for formrules tests."""

import pytest

from formrules.validation import InMemoryLookupService


@pytest.fixture
def lookup() -> InMemoryLookupService:
    """Lookup service with a small users collection."""
    return InMemoryLookupService({
        "users": [
            {"id": 1, "email": "taken@example.com", "username": "ada", "age": 36},
            {"id": 2, "email": "grace@example.com", "username": "grace", "age": 85},
        ],
    })
